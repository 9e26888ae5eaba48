"""
Task model.

Represents a unit of work that is always in exactly one state.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_management.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from task_management.models.state import State

TASK_TITLE_MAX_LENGTH = 200
TASK_DESCRIPTION_MAX_LENGTH = 1000


class Task(TimestampedModel):
    """
    Task table - represents tasks or to-do items.
    """

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(
        String(TASK_TITLE_MAX_LENGTH),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        String(TASK_DESCRIPTION_MAX_LENGTH),
        nullable=True,
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    # RESTRICT: a state cannot be deleted while tasks point at it
    state_id: Mapped[int] = mapped_column(
        ForeignKey("state.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Loaded explicitly by the repository, never lazily
    state: Mapped["State"] = relationship(
        "State",
        lazy="raise",
    )

    __table_args__ = (
        Index("ix_task_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} state_id={self.state_id}>"
