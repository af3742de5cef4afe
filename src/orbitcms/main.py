"""FastAPI application factory and entry point."""

import logging

import uvicorn
from fastapi import FastAPI

from orbitcms import __version__
from orbitcms.api.exception_handlers import register_exception_handlers
from orbitcms.api.health_checks import register_health_endpoints
from orbitcms.api.routers import api_router
from orbitcms.config import Settings, get_settings
from orbitcms.infrastructure.lifecycle import lifespan
from orbitcms.infrastructure.observability import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


# Hey future me, create_app() takes explicit settings so tests can point the app at a temp
# database without touching environment variables or the lru_cache in get_settings().
def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; defaults to the cached environment settings
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="OrbitCMS",
        description="Content backend for pages, audio tracks and playlists",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.is_development else None,
        redoc_url=None,
    )
    app.state.settings = settings

    app.add_middleware(
        RequestLoggingMiddleware,
        log_request_body=settings.observability.log_request_body,
    )
    register_exception_handlers(app, settings)
    register_health_endpoints(app, settings)
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run("orbitcms.main:app", host=settings.host, port=settings.port)
