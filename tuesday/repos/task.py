from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tuesday.models.board_column import BoardColumn
from tuesday.models.task import Task
from tuesday.repos.base import BaseRepository
from tuesday.schemas.task import TaskCreate, TaskUpdateRequest


class TaskRepo(BaseRepository[Task, TaskCreate, TaskUpdateRequest]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Task)

    async def next_order(self, column_id: int) -> int:
        """One past the highest task order in the column, or 0 for the first task."""
        stmt = select(func.max(Task.order)).where(Task.column_id == column_id)
        result = await self.session.execute(stmt)
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def get_assigned_between(self, user_id: int, start: str, end: str) -> list[Task]:
        """Tasks assigned to a user with a deadline in [start, end], inclusive.

        Deadlines are ISO date strings so the range check is a string comparison.
        """
        stmt = (
            select(Task)
            .where(
                Task.assignee_id == user_id,
                Task.deadline.is_not(None),
                Task.deadline >= start,
                Task.deadline <= end,
            )
            .options(selectinload(Task.column).selectinload(BoardColumn.board))
            .order_by(Task.deadline, Task.order, Task.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
