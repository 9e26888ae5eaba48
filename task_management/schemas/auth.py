"""
Authentication Pydantic schemas.
"""

from datetime import datetime
from typing import Optional

from task_management.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Schema for login request."""

    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SessionResponse(CamelModel):
    """Returned by login and register."""

    token: str
    username: str
    email: str
    expires_at: datetime


class EmailExistsResponse(CamelModel):
    exists: bool


class TokenData(CamelModel):
    """Claims of a verified access token."""

    user_id: int
    username: str
    email: str
