from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.core.constants import UNASSIGNED_OWNER, TaskStatus
from tuesday.core.exceptions.domain import ResourceNotFoundError, ValidationError
from tuesday.models.user import User
from tuesday.repos.board_column import BoardColumnRepo
from tuesday.repos.task import TaskRepo
from tuesday.repos.user import UserRepo
from tuesday.schemas.task import TaskCreate, TaskCreateRequest, TaskResponse, TaskUpdateRequest
from tuesday.utils.week import parse_iso_date

STATUSES = {s.value for s in TaskStatus}


def _clean_owner(owner: str | None) -> str | None:
    """An explicit owner override, or None when blank or absent."""
    if owner is None:
        return None
    return owner.strip() or None


def _validate_status(status: str | None) -> str:
    if status not in STATUSES:
        raise ValidationError(f"Invalid task status: {status!r}")
    return status


def _normalize_deadline(deadline: str | None) -> str | None:
    """Empty deadlines become NULL; anything else must be a real YYYY-MM-DD date."""
    if deadline is None or not deadline.strip():
        return None
    deadline = deadline.strip()
    if parse_iso_date(deadline) is None:
        raise ValidationError("deadline must be in YYYY-MM-DD format")
    return deadline


class TaskService:
    """Task creation, partial updates and deletion inside columns."""

    def __init__(self, session: AsyncSession):
        self.tasks = TaskRepo(session)
        self.columns = BoardColumnRepo(session)
        self.users = UserRepo(session)

    async def _get_assignee(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def create_task(self, column_id: int, data: TaskCreateRequest) -> TaskResponse:
        """Append a task to the bottom of a column.

        Raises:
            ResourceNotFoundError: If the column or the assignee does not exist.
            ValidationError: If status or deadline is invalid.
        """
        if not await self.columns.exists(column_id):
            raise ResourceNotFoundError("Column", str(column_id))

        status = _validate_status(data.status or TaskStatus.NOT_STARTED)
        deadline = _normalize_deadline(data.deadline)

        owner = _clean_owner(data.owner)
        if data.assignee_id is not None:
            assignee = await self._get_assignee(data.assignee_id)
            owner = owner or assignee.name

        order = await self.tasks.next_order(column_id)
        task = await self.tasks.create_one(
            TaskCreate(
                title=data.title or "",
                owner=owner or UNASSIGNED_OWNER,
                assignee_id=data.assignee_id,
                status=status,
                deadline=deadline,
                column_id=column_id,
                order=order,
            )
        )
        logger.info(f"Task created: id={task.id}, column_id={column_id}, order={order}")
        return TaskResponse.model_validate(task)

    async def update_task(self, task_id: int, data: TaskUpdateRequest) -> TaskResponse:
        """Apply the recognised fields that were present in the request body.

        Setting ``assigneeId`` copies the assignee's name into ``owner`` and
        clearing it resets ``owner`` to "Unassigned", unless ``owner`` is sent
        in the same update.
        """
        task = await self.tasks.get_by_id(task_id)
        if not task:
            raise ResourceNotFoundError("Task", str(task_id))

        sent = data.model_fields_set
        changes: dict = {}

        if "title" in sent:
            changes["title"] = data.title or ""
        if "status" in sent:
            changes["status"] = _validate_status(data.status)
        if "deadline" in sent:
            changes["deadline"] = _normalize_deadline(data.deadline)

        owner = _clean_owner(data.owner) if "owner" in sent else None
        if "assignee_id" in sent:
            if data.assignee_id is None:
                changes["assignee_id"] = None
                changes["owner"] = owner or UNASSIGNED_OWNER
            else:
                assignee = await self._get_assignee(data.assignee_id)
                changes["assignee_id"] = assignee.id
                changes["owner"] = owner or assignee.name
        elif owner is not None:
            changes["owner"] = owner
        elif "owner" in sent:
            # Blank owner falls back to the current assignee
            assignee = await self.users.get_by_id(task.assignee_id) if task.assignee_id else None
            changes["owner"] = assignee.name if assignee else UNASSIGNED_OWNER

        task = await self.tasks.apply(task, changes)
        logger.info(f"Task updated: id={task_id}, fields={sorted(changes)}")
        return TaskResponse.model_validate(task)

    async def delete_task(self, task_id: int) -> None:
        deleted = await self.tasks.delete_by_id(task_id)
        if not deleted:
            raise ResourceNotFoundError("Task", str(task_id))
        logger.info(f"Task deleted: id={task_id}")
