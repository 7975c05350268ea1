from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuesday.core.constants import FieldSizes, TeamRole
from tuesday.models.base import Base

if TYPE_CHECKING:
    from tuesday.models.team import Team
    from tuesday.models.user import User


class TeamMembership(Base):
    __table_args__ = (UniqueConstraint("user_id", "team_id", name="uq_team_membership"),)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    team_id: Mapped[int] = mapped_column(
        ForeignKey("team.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(
        String(FieldSizes.TINY), nullable=False, default=TeamRole.MEMBER
    )

    user: Mapped["User"] = relationship(back_populates="memberships")
    team: Mapped["Team"] = relationship(back_populates="memberships")
