from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tuesday.models.board_column import BoardColumn
from tuesday.repos.base import BaseRepository, storable_id
from tuesday.schemas.board import ColumnCreate, ColumnUpdateRequest


class BoardColumnRepo(BaseRepository[BoardColumn, ColumnCreate, ColumnUpdateRequest]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, BoardColumn)

    async def next_order(self, board_id: int) -> int:
        """One past the highest column order on the board, or 0 for the first column."""
        stmt = select(func.max(BoardColumn.order)).where(BoardColumn.board_id == board_id)
        result = await self.session.execute(stmt)
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def get_with_tasks(self, column_id: int) -> BoardColumn | None:
        if not storable_id(column_id):
            return None
        stmt = (
            select(BoardColumn)
            .where(BoardColumn.id == column_id)
            .options(selectinload(BoardColumn.tasks))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
