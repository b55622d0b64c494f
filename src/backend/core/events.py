"""
Application lifecycle event handlers.

Manages startup and shutdown of the database handle.
"""

from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings
from db.session import close_db, init_db

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info(f"Starting {settings.APP_NAME} API...")

        # The handle is created even without a database so reads can degrade
        app.state.database = await init_db()
        logger.info("Database initialized", configured=app.state.database.is_configured)

        logger.info(f"{settings.APP_NAME} API started successfully")

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info(f"Shutting down {settings.APP_NAME} API...")

        await close_db()
        app.state.database = None

        logger.info(f"{settings.APP_NAME} API shutdown complete")

    return stop_app
