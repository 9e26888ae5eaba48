"""
Base model with common fields.

Tables that are created and updated through the API inherit from this to get:
- id (integer primary key)
- created_at (when the record was created)
- updated_at (when the record was last modified)

Repositories set both timestamps explicitly; the server defaults only cover
rows written outside the application.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from task_management.db.base import Base


class TimestampedModel(Base):
    """Abstract base class, no table is created for it."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
