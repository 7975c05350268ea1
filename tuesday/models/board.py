from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuesday.core.constants import FieldSizes
from tuesday.models.base import Base

if TYPE_CHECKING:
    from tuesday.models.board_column import BoardColumn
    from tuesday.models.team import Team


class Board(Base):
    title: Mapped[str] = mapped_column(String(FieldSizes.MEDIUM), nullable=False)
    # NULL team means the board is visible to every user
    team_id: Mapped[int | None] = mapped_column(
        ForeignKey("team.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team: Mapped[Optional["Team"]] = relationship(back_populates="boards")
    columns: Mapped[list["BoardColumn"]] = relationship(
        back_populates="board",
        cascade="all, delete-orphan",
        order_by="BoardColumn.order",
    )
