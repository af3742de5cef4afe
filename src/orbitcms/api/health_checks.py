"""Health check endpoints for application monitoring."""

import logging
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from orbitcms.config import Settings
from orbitcms.infrastructure.observability.health import (
    HealthStatus,
    check_database_health,
)

logger = logging.getLogger(__name__)


def register_health_endpoints(app: FastAPI, settings: Settings) -> None:
    """Register health endpoints.

    - /health and {api_prefix}/health: liveness, no dependency calls
    - /ready: readiness, includes a database round trip
    """

    def _uptime(request: Request) -> float:
        started_at = getattr(request.app.state, "started_at", None)
        if started_at is None:
            return 0.0
        return round(time.monotonic() - started_at, 3)

    # Hey, liveness must stay cheap - no DB call here, use /ready for that
    async def health_check(request: Request) -> dict[str, Any]:
        return {
            "status": "OK",
            "message": "Backend is healthy and running!",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": _uptime(request),
            "environment": settings.environment.value,
        }

    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route(
        f"{settings.api_prefix}/health", health_check, methods=["GET"], tags=["Health"]
    )

    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request) -> JSONResponse:
        """Readiness with dependency checks; 503 while the database is unreachable."""
        db = getattr(request.app.state, "db", None)
        if db is None:
            return JSONResponse(
                status_code=503,
                content={"status": HealthStatus.UNHEALTHY.value, "checks": {}},
            )

        database = await check_database_health(db)
        overall = database.status
        body = {
            "status": overall.value,
            "timestamp": datetime.now(UTC).isoformat(),
            "checks": {database.name: database.to_dict()},
        }
        return JSONResponse(
            status_code=200 if overall == HealthStatus.HEALTHY else 503,
            content=body,
        )
