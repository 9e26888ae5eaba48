"""
Task Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from task_management.schemas.base import CamelModel


class TaskInput(CamelModel):
    """
    Body of POST /tasks and PUT /tasks/{id}.

    Both operations take the full set of fields; an update replaces the
    task's title, description, due date and state. Only types are checked
    here, the business rules are applied by validators.validate_task_input.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    state_id: Optional[int] = None


class TaskRead(CamelModel):
    """Schema for reading task data (API response)."""

    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    state_id: int
    state_name: str
    created_at: datetime
    updated_at: datetime
