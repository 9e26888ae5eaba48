"""
Main FastAPI application.

Run with the console script (task-management-api) or:
    uvicorn task_management.main:create_app --factory
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from task_management import __version__
from task_management.core.config import get_settings
from task_management.core.context import AppContext
from task_management.core.logging import configure_logging
from task_management.errors import register_error_handlers
from task_management.routers import auth, health, state, task

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the application.

    Without an explicit context, settings are read from the environment; a
    missing or too short JWT secret aborts here, before anything is served.
    """
    if context is None:
        context = AppContext.from_settings(get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(context.settings.LOG_LEVEL)
        logger.info("Starting %s...", context.settings.APP_NAME)

        yield

        logger.info("Shutting down %s...", context.settings.APP_NAME)
        await context.close()

    app = FastAPI(
        title=context.settings.APP_NAME,
        description="Tasks, task states and user accounts with JWT bearer authentication",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    register_error_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router)
    app.include_router(task.router)
    app.include_router(state.router)

    return app


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "task_management.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )
