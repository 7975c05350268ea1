from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.core.constants import DEFAULT_COLUMN_COLOR
from tuesday.core.exceptions.domain import ResourceNotFoundError, ValidationError
from tuesday.repos.board import BoardRepo
from tuesday.repos.board_column import BoardColumnRepo
from tuesday.repos.team import TeamRepo
from tuesday.schemas.board import (
    BoardCreate,
    BoardCreateRequest,
    BoardDetailResponse,
    BoardResponse,
    ColumnCreate,
    ColumnCreateRequest,
    ColumnResponse,
    ColumnUpdateRequest,
)
from tuesday.services.access_service import AccessService


class BoardService:
    """Boards and their columns."""

    def __init__(self, session: AsyncSession):
        self.boards = BoardRepo(session)
        self.columns = BoardColumnRepo(session)
        self.teams = TeamRepo(session)
        self.access = AccessService(session)

    async def list_boards(self, user_id: int | None = None) -> list[BoardResponse]:
        """Boards visible to ``user_id``, or every board when no user is given."""
        if user_id is None:
            boards = await self.boards.list_visible()
        else:
            boards = await self.access.resolve_visible_boards(user_id)
        return [BoardResponse.model_validate(b) for b in boards]

    async def create_board(self, data: BoardCreateRequest) -> BoardResponse:
        title = (data.title or "").strip()
        if not title:
            raise ValidationError("Board title is required")

        if data.team_id is not None and not await self.teams.exists(data.team_id):
            raise ResourceNotFoundError("Team", str(data.team_id))

        board = await self.boards.create_one(BoardCreate(title=title, team_id=data.team_id))
        logger.info(f"Board created: id={board.id}, title={title!r}, team_id={board.team_id}")
        return BoardResponse.model_validate(await self.boards.get_with_team(board.id))

    async def get_board(self, board_id: int, user_id: int | None = None) -> BoardDetailResponse:
        """Board with ordered columns and tasks.

        Raises:
            ResourceNotFoundError: If the board (or the given user) does not exist.
            AuthorizationError: If the user may not see the board.
        """
        board = await self.boards.get_detail(board_id)
        if not board:
            raise ResourceNotFoundError("Board", str(board_id))
        if user_id is not None:
            await self.access.ensure_board_access(user_id, board)
        return BoardDetailResponse.model_validate(board)

    async def delete_board(self, board_id: int) -> None:
        board = await self.boards.get_detail(board_id)
        if not board:
            raise ResourceNotFoundError("Board", str(board_id))
        await self.boards.delete(board)
        logger.info(f"Board deleted: id={board_id}")

    async def create_column(self, board_id: int, data: ColumnCreateRequest) -> ColumnResponse:
        if not await self.boards.exists(board_id):
            raise ResourceNotFoundError("Board", str(board_id))

        title = (data.title or "").strip()
        if not title:
            raise ValidationError("Column title is required")

        # Read-then-insert; concurrent creates may share an order value
        order = await self.columns.next_order(board_id)
        column = await self.columns.create_one(
            ColumnCreate(
                title=title,
                color=data.color or DEFAULT_COLUMN_COLOR,
                board_id=board_id,
                order=order,
            )
        )
        logger.info(f"Column created: id={column.id}, board_id={board_id}, order={order}")
        return ColumnResponse.model_validate(await self.columns.get_with_tasks(column.id))

    async def update_column(self, column_id: int, data: ColumnUpdateRequest) -> ColumnResponse:
        column = await self.columns.get_by_id(column_id)
        if not column:
            raise ResourceNotFoundError("Column", str(column_id))

        changes: dict = {}
        if data.title is not None:
            title = data.title.strip()
            if not title:
                raise ValidationError("Column title is required")
            changes["title"] = title
        if data.color:
            changes["color"] = data.color

        await self.columns.apply(column, changes)
        logger.info(f"Column updated: id={column_id}, fields={sorted(changes)}")
        return ColumnResponse.model_validate(await self.columns.get_with_tasks(column_id))

    async def delete_column(self, column_id: int) -> None:
        column = await self.columns.get_with_tasks(column_id)
        if not column:
            raise ResourceNotFoundError("Column", str(column_id))
        await self.columns.delete(column)
        logger.info(f"Column deleted: id={column_id}")
