"""Health check primitives."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from orbitcms.infrastructure.persistence import Database

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health check status."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheck:
    """Result of a health check."""

    name: str
    status: HealthStatus
    message: str | None = None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status.value}
        if self.message:
            data["message"] = self.message
        if self.details:
            data["details"] = self.details
        return data


async def check_database_health(db: Database) -> HealthCheck:
    """Check document store connectivity."""
    try:
        await db.ping()
    except Exception as e:
        logger.exception("Database health check failed", extra={"error": str(e)})
        return HealthCheck(
            name="database",
            status=HealthStatus.UNHEALTHY,
            message=f"Database connection failed: {e}",
        )
    return HealthCheck(
        name="database",
        status=HealthStatus.HEALTHY,
        message="Database connection successful",
    )
