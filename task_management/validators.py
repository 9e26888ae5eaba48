"""
Request validation rules.

One function per input shape. Each returns the list of rejected fields
(empty when the input is acceptable); routers turn a non-empty list into an
InvalidInputError before any service is called.
"""

from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from task_management.errors import FieldError, InvalidInputError
from task_management.models.state import STATE_NAME_MAX_LENGTH
from task_management.models.task import TASK_DESCRIPTION_MAX_LENGTH, TASK_TITLE_MAX_LENGTH
from task_management.models.user import EMAIL_MAX_LENGTH
from task_management.schemas.auth import LoginRequest, RegisterRequest
from task_management.schemas.state import StateInput
from task_management.schemas.task import TaskInput

PASSWORD_MIN_LENGTH = 6
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_email(email: Optional[str], errors: List[FieldError]) -> None:
    if _is_blank(email):
        errors.append(FieldError("email", "Email is required"))
        return
    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(FieldError("email", f"Email cannot exceed {EMAIL_MAX_LENGTH} characters"))
        return
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        errors.append(FieldError("email", "Email format is not valid"))


def _check_password(password: Optional[str], errors: List[FieldError]) -> None:
    if not password:
        errors.append(FieldError("password", "Password is required"))
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError("password", f"Password must be at least {PASSWORD_MIN_LENGTH} characters"))


def validate_task_input(data: TaskInput) -> List[FieldError]:
    errors: List[FieldError] = []

    if _is_blank(data.title):
        errors.append(FieldError("title", "Title is required"))
    elif len(data.title) > TASK_TITLE_MAX_LENGTH:
        errors.append(FieldError("title", f"Title cannot exceed {TASK_TITLE_MAX_LENGTH} characters"))

    if data.description is not None and len(data.description) > TASK_DESCRIPTION_MAX_LENGTH:
        errors.append(
            FieldError("description", f"Description cannot exceed {TASK_DESCRIPTION_MAX_LENGTH} characters")
        )

    if data.state_id is None or data.state_id <= 0:
        errors.append(FieldError("stateId", "State ID is required and must be greater than 0"))

    return errors


def validate_state_input(data: StateInput) -> List[FieldError]:
    errors: List[FieldError] = []
    if _is_blank(data.name):
        errors.append(FieldError("name", "State name is required"))
    elif len(data.name.strip()) > STATE_NAME_MAX_LENGTH:
        errors.append(FieldError("name", f"State name cannot exceed {STATE_NAME_MAX_LENGTH} characters"))
    return errors


def validate_login(data: LoginRequest) -> List[FieldError]:
    # Length rules belong to registration; a short password just fails to match
    errors: List[FieldError] = []
    _check_email(data.email, errors)
    if not data.password:
        errors.append(FieldError("password", "Password is required"))
    return errors


def validate_register(data: RegisterRequest) -> List[FieldError]:
    errors: List[FieldError] = []

    if _is_blank(data.username):
        errors.append(FieldError("username", "Username is required"))
    elif not USERNAME_MIN_LENGTH <= len(data.username.strip()) <= USERNAME_MAX_LENGTH:
        errors.append(
            FieldError(
                "username",
                f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters",
            )
        )

    _check_email(data.email, errors)
    _check_password(data.password, errors)
    return errors


def validate_email_address(email: str) -> List[FieldError]:
    errors: List[FieldError] = []
    _check_email(email, errors)
    return errors


def ensure_valid(errors: List[FieldError]) -> None:
    """Raise InvalidInputError carrying every field error, if there are any."""
    if errors:
        raise InvalidInputError.from_field_errors(errors)
