import pytest

from tuesday.services.access_service import can_view_board


@pytest.mark.parametrize(
    ("board_team_id", "team_ids", "expected"),
    [
        (None, set(), True),
        (None, {1}, True),
        (1, {1, 2}, True),
        (3, {1, 2}, False),
        (3, set(), False),
        (3, None, True),
        (None, None, True),
    ],
)
def test_can_view_board(board_team_id, team_ids, expected):
    assert can_view_board(board_team_id, team_ids) is expected
