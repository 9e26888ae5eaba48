"""
Authentication router for login, registration and email checks.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.core.dependencies import get_auth_service, get_db
from task_management.schemas.auth import EmailExistsResponse, LoginRequest, RegisterRequest, SessionResponse
from task_management.services.auth_service import AuthService
from task_management.validators import ensure_valid, validate_email_address, validate_login, validate_register

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=SessionResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with email and password and return an access token.

    Unknown emails and wrong passwords get the same 401 response.
    """
    ensure_valid(validate_login(credentials))
    return await auth_service.login(credentials.email, credentials.password)


@router.post("/register", response_model=SessionResponse)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db),
):
    """Create an account and return an access token for it."""
    ensure_valid(validate_register(data))
    session = await auth_service.register(data.username, data.email, data.password)
    await db.commit()
    return session


@router.get("/check-email/{email}", response_model=EmailExistsResponse)
async def check_email(
    email: str,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Tell whether an account already uses this email."""
    ensure_valid(validate_email_address(email))
    exists = await auth_service.user_exists(email)
    return EmailExistsResponse(exists=exists)
