from collections import Counter
from datetime import date

from tuesday.core.constants import TaskStatus
from tuesday.schemas.board import BoardDetailResponse
from tuesday.schemas.task import TaskResponse


def board_tasks(board: BoardDetailResponse) -> list[TaskResponse]:
    return [task for column in board.columns for task in column.tasks]


def calculate_status_distribution(tasks: list[TaskResponse]) -> dict[str, int]:
    """Count tasks per status, listing every known status even when zero."""
    counts = Counter(task.status for task in tasks)
    return {status.value: counts.get(status.value, 0) for status in TaskStatus}


def get_overdue_tasks(
    tasks: list[TaskResponse],
    *,
    today: date | None = None,
) -> list[TaskResponse]:
    """Tasks past their deadline that are not Done, oldest deadline first."""
    today_iso = (today or date.today()).isoformat()
    overdue = [
        task
        for task in tasks
        if task.deadline and task.deadline < today_iso and task.status != TaskStatus.DONE
    ]
    return sorted(overdue, key=lambda t: t.deadline or "")


def completion_ratio(tasks: list[TaskResponse]) -> float:
    """Share of tasks that are Done (0.0 for an empty list)."""
    if not tasks:
        return 0.0
    done = sum(1 for task in tasks if task.status == TaskStatus.DONE)
    return done / len(tasks)
