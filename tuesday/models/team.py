from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuesday.core.constants import FieldSizes
from tuesday.models.base import Base

if TYPE_CHECKING:
    from tuesday.models.board import Board
    from tuesday.models.team_membership import TeamMembership


class Team(Base):
    name: Mapped[str] = mapped_column(String(FieldSizes.MEDIUM), nullable=False)

    memberships: Mapped[list["TeamMembership"]] = relationship(
        back_populates="team", cascade="all, delete-orphan"
    )
    # Boards of a deleted team become visible to everyone
    boards: Mapped[list["Board"]] = relationship(back_populates="team")
