from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuesday.core.constants import UNASSIGNED_OWNER, FieldSizes, TaskStatus
from tuesday.models.base import Base

if TYPE_CHECKING:
    from tuesday.models.board_column import BoardColumn
    from tuesday.models.user import User


class Task(Base):
    title: Mapped[str] = mapped_column(String(FieldSizes.LONG), nullable=False, default="")
    owner: Mapped[str] = mapped_column(
        String(FieldSizes.MEDIUM), nullable=False, default=UNASSIGNED_OWNER
    )
    assignee_id: Mapped[int | None] = mapped_column(
        ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status: Mapped[str] = mapped_column(
        String(FieldSizes.TINY), nullable=False, default=TaskStatus.NOT_STARTED
    )
    # ISO date (YYYY-MM-DD); range queries compare strings
    deadline: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    column_id: Mapped[int] = mapped_column(
        ForeignKey("board_column.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    column: Mapped["BoardColumn"] = relationship(back_populates="tasks")
    assignee: Mapped[Optional["User"]] = relationship(back_populates="assigned_tasks")
