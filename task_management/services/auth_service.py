"""
Authentication service for login, registration and token management.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from task_management.core.jwt import JWTService
from task_management.core.security import (
    DEFAULT_BCRYPT_ROUNDS,
    decoy_password_hash,
    hash_password,
    verify_password,
)
from task_management.errors import DuplicateUserError, InvalidCredentialsError
from task_management.models.user import User
from task_management.repositories.user_repository import UserRepository
from task_management.schemas.auth import SessionResponse
from task_management.utils.time import utc_now

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession, jwt_service: JWTService, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.user_repository = UserRepository(db)
        self.jwt_service = jwt_service
        self.bcrypt_rounds = bcrypt_rounds

    def create_session(self, user: User) -> SessionResponse:
        """
        Issue an access token for a user.

        Args:
            user: Persisted user

        Returns:
            SessionResponse whose expires_at matches the token's exp claim
        """
        issued_at = utc_now()
        token = self.jwt_service.issue_token(user, issued_at=issued_at)
        return SessionResponse(
            token=token,
            username=user.username,
            email=user.email,
            expires_at=self.jwt_service.expires_at(issued_at),
        )

    async def login(self, email: str, password: str) -> SessionResponse:
        """
        Perform user login.

        An unknown email and a wrong password fail identically, and both
        paths run one bcrypt verification. bcrypt runs in the threadpool so
        other requests keep being served meanwhile.

        Raises:
            InvalidCredentialsError: authentication failed
        """
        user = await self.user_repository.get_by_email(email)
        if user is not None:
            stored_hash = user.password_hash
        else:
            stored_hash = await run_in_threadpool(decoy_password_hash, self.bcrypt_rounds)

        matches = await run_in_threadpool(verify_password, password, stored_hash)
        if not matches or user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        logger.info("User %s logged in", user.id)
        return self.create_session(user)

    async def register(self, username: str, email: str, password: str) -> SessionResponse:
        """
        Create an account and log it in.

        Raises:
            DuplicateUserError: the email is already registered
        """
        if await self.user_repository.exists_by_email(email):
            raise DuplicateUserError(email)

        user = User(
            username=username.strip(),
            email=email,
            password_hash=await run_in_threadpool(hash_password, password, self.bcrypt_rounds),
        )
        try:
            user = await self.user_repository.create(user)
        except IntegrityError as exc:
            raise DuplicateUserError(email) from exc

        logger.info("Registered user %s", user.id)
        return self.create_session(user)

    async def user_exists(self, email: str) -> bool:
        return await self.user_repository.exists_by_email(email)
