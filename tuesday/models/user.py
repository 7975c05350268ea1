from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuesday.core.constants import FieldSizes, UserRole
from tuesday.models.base import Base

if TYPE_CHECKING:
    from tuesday.models.task import Task
    from tuesday.models.team_membership import TeamMembership


class User(Base):
    name: Mapped[str] = mapped_column(String(FieldSizes.MEDIUM), nullable=False)
    email: Mapped[str] = mapped_column(
        String(FieldSizes.MEDIUM), unique=True, nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(
        String(FieldSizes.TINY), nullable=False, default=UserRole.MEMBER
    )

    memberships: Mapped[list["TeamMembership"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    # Deleting a user unassigns their tasks
    assigned_tasks: Mapped[list["Task"]] = relationship(back_populates="assignee")
