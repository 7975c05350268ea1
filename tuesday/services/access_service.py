from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.core.constants import UserRole
from tuesday.core.exceptions.domain import AuthorizationError, ResourceNotFoundError
from tuesday.models.board import Board
from tuesday.repos.board import BoardRepo
from tuesday.repos.user import UserRepo


def can_view_board(board_team_id: int | None, team_ids: set[int] | None) -> bool:
    """Whether a board is visible given the viewer's team ids (None = administrator)."""
    if team_ids is None or board_team_id is None:
        return True
    return board_team_id in team_ids


class AccessService:
    """Resolves which boards a user may see from their role and team memberships."""

    def __init__(self, session: AsyncSession):
        self.users = UserRepo(session)
        self.boards = BoardRepo(session)

    async def get_team_scope(self, user_id: int) -> set[int] | None:
        """Team ids visible to the user, or None when the user is an administrator.

        Raises:
            ResourceNotFoundError: If the user does not exist.
        """
        user = await self.users.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundError("User", str(user_id))
        if user.role == UserRole.ADMIN:
            return None
        return await self.users.get_team_ids(user_id)

    async def resolve_visible_boards(self, user_id: int) -> list[Board]:
        team_ids = await self.get_team_scope(user_id)
        return await self.boards.list_visible(team_ids)

    async def ensure_board_access(self, user_id: int, board: Board) -> None:
        """Raise AuthorizationError if the user may not open ``board``."""
        team_ids = await self.get_team_scope(user_id)
        if not can_view_board(board.team_id, team_ids):
            logger.warning(f"Board access denied: user_id={user_id}, board_id={board.id}")
            raise AuthorizationError("You do not have access to this board")
