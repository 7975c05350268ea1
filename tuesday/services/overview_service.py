from datetime import timedelta

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.core.exceptions.domain import ResourceNotFoundError, ValidationError
from tuesday.repos.task import TaskRepo
from tuesday.repos.user import UserRepo
from tuesday.schemas.overview import DayBucket, OverviewTask, OverviewUser, WeeklyOverviewResponse
from tuesday.utils.week import bucket_by_day, resolve_week_start


class OverviewService:
    """Per-person weekly calendar of deadline-bearing tasks."""

    def __init__(self, session: AsyncSession):
        self.users = UserRepo(session)
        self.tasks = TaskRepo(session)

    async def weekly_overview(
        self, user_id: int | None, week_start: str | None = None
    ) -> WeeklyOverviewResponse:
        """Bucket the user's assigned tasks due in the requested week into Monday..Sunday.

        Raises:
            ValidationError: If ``user_id`` is missing or ``week_start`` is not YYYY-MM-DD.
            ResourceNotFoundError: If the user does not exist.
        """
        if user_id is None:
            raise ValidationError("userId is required")

        user = await self.users.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundError("User", str(user_id))

        start = resolve_week_start(week_start)
        if start is None:
            raise ValidationError("weekStart must be in YYYY-MM-DD format")
        end = start + timedelta(days=6)

        tasks = await self.tasks.get_assigned_between(user_id, start.isoformat(), end.isoformat())
        logger.debug(
            f"Weekly overview: user_id={user_id}, week={start.isoformat()}, tasks={len(tasks)}"
        )

        days = [
            DayBucket(
                weekday=weekday,
                date=iso_day,
                tasks=[
                    OverviewTask(
                        id=task.id,
                        title=task.title,
                        status=task.status,
                        deadline=task.deadline,
                        board_id=task.column.board.id,
                        board_title=task.column.board.title,
                        column_id=task.column.id,
                        column_title=task.column.title,
                    )
                    for task in day_tasks
                ],
            )
            for weekday, iso_day, day_tasks in bucket_by_day(start, tasks, lambda t: t.deadline)
        ]

        return WeeklyOverviewResponse(
            user=OverviewUser(id=user.id, name=user.name),
            week_start=start.isoformat(),
            week_end=end.isoformat(),
            days=days,
        )
