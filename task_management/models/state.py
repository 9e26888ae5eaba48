"""
State model.

A named label for the lifecycle stage of a task ("Pendiente", "Completado", ...).
"""

from sqlalchemy import Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from task_management.models.base_model import TimestampedModel

STATE_NAME_MAX_LENGTH = 100


class State(TimestampedModel):
    """
    State table - free-form task lifecycle labels.

    Names are unique regardless of case. Tasks reference states through
    task.state_id; there is no collection of tasks on the state side.
    """

    __tablename__ = "state"

    name: Mapped[str] = mapped_column(
        String(STATE_NAME_MAX_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<State id={self.id} name={self.name!r}>"


# Case-insensitive uniqueness of state names
Index("ix_state_name_lower", func.lower(State.name), unique=True)
