"""Application lifecycle management for startup and shutdown tasks."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from orbitcms.config import Settings, get_settings
from orbitcms.infrastructure.observability import configure_logging
from orbitcms.infrastructure.persistence import Database
from orbitcms.infrastructure.security import JWTAuthGate

logger = logging.getLogger(__name__)


# Listen future me, everything before `yield` runs at startup, everything after at shutdown.
# Shared resources go on app.state so dependencies can reach them. Settings come from
# app.state when create_app() was handed explicit ones (tests), else from the environment.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles:
    - Logging configuration
    - Database engine creation and table bootstrap
    - AuthGate construction
    - Engine disposal on shutdown
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info(
        "Starting application: %s",
        settings.app_name,
        extra={"environment": settings.environment.value},
    )

    db = Database(settings)
    try:
        if settings.database.auto_create:
            await db.create_tables()
            logger.info("Database tables ready")

        app.state.settings = settings
        app.state.db = db
        app.state.auth_gate = JWTAuthGate(settings)
        app.state.started_at = time.monotonic()

        yield
    finally:
        logger.info("Shutting down application")
        await db.close()
        logger.info("Application shutdown complete")
