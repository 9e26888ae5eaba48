"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from task_management.models.state import State
from task_management.models.task import Task
from task_management.models.user import User

__all__ = [
    "State",
    "Task",
    "User",
]
