"""
User repository - database operations for User.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.models.user import User
from task_management.utils.time import utc_now


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        if not email or not email.strip():
            return None
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """True when an account is registered under the email."""
        if not email or not email.strip():
            return False
        result = await self.db.execute(
            select(select(User.id).where(func.lower(User.email) == normalize_email(email)).exists())
        )
        return bool(result.scalar())

    async def create(self, user: User) -> User:
        """Insert a new user; the email is stored lower-cased."""
        user.email = normalize_email(user.email)
        user.created_at = utc_now()
        self.db.add(user)
        await self.db.flush()
        return user
