"""
SQLAlchemy declarative base.

All models inherit from this Base class so their tables share one metadata
collection (used by Alembic and by the test suite's create_all).
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass
