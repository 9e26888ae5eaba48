"""
FastAPI dependencies for the application.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.core.context import AppContext
from task_management.errors import UnauthorizedError
from task_management.schemas.auth import TokenData
from task_management.services.auth_service import AuthService

# Security scheme for JWT bearer tokens; missing headers are reported by
# get_current_user so the response is a 401 with the usual error body.
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


async def get_db(context: AppContext = Depends(get_context)) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get a database session.

    Routers commit explicitly after a successful write; anything raised while
    the session is in use rolls it back.
    """
    async with context.session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: AppContext = Depends(get_context),
) -> TokenData:
    """
    Get the authenticated caller from the bearer token.

    Raises:
        UnauthorizedError: header missing, token invalid, expired or for
            another issuer/audience
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")

    payload = context.jwt_service.decode_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid authentication credentials")

    try:
        return TokenData(
            user_id=int(payload["sub"]),
            username=payload.get("name", ""),
            email=payload.get("email", ""),
        )
    except (KeyError, ValueError) as exc:
        raise UnauthorizedError("Invalid token payload") from exc


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> AuthService:
    return AuthService(db, context.jwt_service, bcrypt_rounds=context.settings.BCRYPT_ROUNDS)
