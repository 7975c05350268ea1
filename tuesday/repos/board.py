from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tuesday.models.board import Board
from tuesday.models.board_column import BoardColumn
from tuesday.repos.base import BaseRepository, storable_id
from tuesday.schemas.board import BoardCreate


class BoardRepo(BaseRepository[Board, BoardCreate, BoardCreate]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Board)

    async def get_with_team(self, board_id: int) -> Board | None:
        if not storable_id(board_id):
            return None
        stmt = (
            select(Board)
            .where(Board.id == board_id)
            .options(selectinload(Board.team))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_detail(self, board_id: int) -> Board | None:
        """Board with its team, ordered columns and their ordered tasks."""
        if not storable_id(board_id):
            return None
        stmt = (
            select(Board)
            .where(Board.id == board_id)
            .options(
                selectinload(Board.team),
                selectinload(Board.columns).selectinload(BoardColumn.tasks),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_visible(self, team_ids: set[int] | None = None) -> list[Board]:
        """Boards newest first.

        With ``team_ids=None`` every board is returned; otherwise only boards
        without a team or owned by one of ``team_ids``.
        """
        stmt = select(Board).options(selectinload(Board.team))
        if team_ids is not None:
            visibility = Board.team_id.is_(None)
            if team_ids:
                visibility = or_(visibility, Board.team_id.in_(team_ids))
            stmt = stmt.where(visibility)
        stmt = stmt.order_by(Board.created_at.desc(), Board.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
