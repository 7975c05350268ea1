from datetime import date

import pytest

from tuesday.utils.week import (
    bucket_by_day,
    format_week_range,
    get_week_start,
    parse_iso_date,
    resolve_week_start,
    shift_week,
    week_days,
)


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (date(2026, 2, 23), date(2026, 2, 23)),  # Monday
        (date(2026, 2, 25), date(2026, 2, 23)),  # Wednesday
        (date(2026, 2, 28), date(2026, 2, 23)),  # Saturday
        (date(2026, 3, 1), date(2026, 2, 23)),  # Sunday
        (date(2026, 3, 2), date(2026, 3, 2)),
        (date(2025, 12, 31), date(2025, 12, 29)),
    ],
)
def test_get_week_start(day, expected):
    assert get_week_start(day) == expected


@pytest.mark.parametrize("value", ["Feb 23", "2026-2-23", "20260223", "2026-02-23T00:00", "2026-13-01", ""])
def test_parse_iso_date_rejects_malformed(value):
    assert parse_iso_date(value) is None


def test_parse_iso_date():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_iso_date("2026-02-29") is None


def test_resolve_week_start():
    today = date(2026, 3, 1)

    assert resolve_week_start(None, today=today) == date(2026, 2, 23)
    assert resolve_week_start("", today=today) == date(2026, 2, 23)
    assert resolve_week_start("2026-02-26") == date(2026, 2, 23)
    assert resolve_week_start("Feb 23") is None


def test_week_days():
    days = week_days(date(2026, 2, 23))

    assert days[0] == ("Monday", date(2026, 2, 23))
    assert days[2] == ("Wednesday", date(2026, 2, 25))
    assert days[-1] == ("Sunday", date(2026, 3, 1))


def test_bucket_by_day_keeps_order_and_drops_outside():
    items = [
        {"id": 1, "deadline": "2026-02-25"},
        {"id": 2, "deadline": "2026-03-05"},
        {"id": 3, "deadline": "2026-02-25"},
        {"id": 4, "deadline": None},
        {"id": 5, "deadline": "2026-02-23"},
    ]

    buckets = bucket_by_day(date(2026, 2, 23), items, lambda item: item["deadline"])

    assert [(weekday, day) for weekday, day, _ in buckets][:3] == [
        ("Monday", "2026-02-23"),
        ("Tuesday", "2026-02-24"),
        ("Wednesday", "2026-02-25"),
    ]
    assert [i["id"] for i in buckets[0][2]] == [5]
    assert [i["id"] for i in buckets[2][2]] == [1, 3]
    assert sum(len(b[2]) for b in buckets) == 3


def test_shift_week():
    assert shift_week(date(2026, 2, 23), 1) == date(2026, 3, 2)
    assert shift_week(date(2026, 2, 23), -1) == date(2026, 2, 16)
    assert shift_week(date(2026, 2, 25), 0) == date(2026, 2, 23)


def test_format_week_range():
    assert format_week_range("2026-02-23", "2026-03-01") == "Feb 23 - Mar 1"
