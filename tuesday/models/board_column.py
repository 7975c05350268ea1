from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuesday.core.constants import DEFAULT_COLUMN_COLOR, FieldSizes
from tuesday.models.base import Base

if TYPE_CHECKING:
    from tuesday.models.board import Board
    from tuesday.models.task import Task


class BoardColumn(Base):
    """A colored task group inside a board."""

    title: Mapped[str] = mapped_column(String(FieldSizes.MEDIUM), nullable=False)
    color: Mapped[str] = mapped_column(
        String(FieldSizes.SHORT), nullable=False, default=DEFAULT_COLUMN_COLOR
    )
    board_id: Mapped[int] = mapped_column(
        ForeignKey("board.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    board: Mapped["Board"] = relationship(back_populates="columns")
    tasks: Mapped[list["Task"]] = relationship(
        back_populates="column",
        cascade="all, delete-orphan",
        order_by="Task.order",
    )
