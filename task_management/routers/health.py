"""Health check router."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from task_management.core.context import AppContext
from task_management.core.dependencies import get_context
from task_management.schemas.health import HealthResponse
from task_management.utils.time import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(context: AppContext = Depends(get_context)):
    """Liveness probe. Always 200; reports whether the database answered."""
    database = "ok"
    try:
        async with context.session_maker() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        database = "unavailable"

    return HealthResponse(status="healthy", timestamp=utc_now(), database=database)
