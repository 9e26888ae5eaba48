"""Error categories raised by the services and their rendering as API responses."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class FieldError:
    """One rejected input field."""

    field: str
    message: str


class ServiceError(Exception):
    """Base class for expected failures raised by the domain services."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(ServiceError):
    """Missing or malformed input."""

    @classmethod
    def from_field_errors(cls, errors: Sequence[FieldError]) -> "InvalidInputError":
        return cls("Validation failed", details=[asdict(error) for error in errors])


class DuplicateUserError(InvalidInputError):
    def __init__(self, email: str):
        super().__init__("User already exists")
        self.email = email


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: int):
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class StateNotFoundError(NotFoundError):
    def __init__(self, state_id: int):
        super().__init__(f"State with ID {state_id} not found")
        self.state_id = state_id


class ConflictError(ServiceError):
    """The operation would break a uniqueness or integrity rule."""


class StateNameConflictError(ConflictError):
    def __init__(self, name: str):
        super().__init__(f"A state named '{name}' already exists")
        self.name = name


class StateInUseError(ConflictError):
    def __init__(self, state_id: int):
        super().__init__("The state cannot be deleted because tasks are assigned to it")
        self.state_id = state_id


class UnauthorizedError(ServiceError):
    """Missing, invalid or expired credentials."""


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Invalid credentials")


STATUS_BY_ERROR = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
)


def status_code_for(exc: ServiceError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_payload(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"message": message}
    if details is not None:
        payload["details"] = details
    return payload


async def service_error_handler(_: Request, exc: ServiceError) -> JSONResponse:
    status_code = status_code_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=build_error_payload(exc.message, exc.details),
        headers=headers,
    )


def _field_errors_from_validation(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors():
        # loc looks like ("body", "stateId") or ("query", "page")
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "Invalid value")})
    return errors


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_payload("Validation failed", _field_errors_from_validation(exc)),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_payload(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_middleware(request: Request, call_next):
    """Log anything unexpected in full and answer with a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_payload(INTERNAL_ERROR_MESSAGE),
        )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(unhandled_error_middleware)
