"""
State Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from task_management.schemas.base import CamelModel


class StateInput(CamelModel):
    """Body of POST /states and PUT /states/{id}. Rules live in validators.py."""

    name: Optional[str] = None


class StateRead(CamelModel):
    """Schema for reading state data (API response)."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime
