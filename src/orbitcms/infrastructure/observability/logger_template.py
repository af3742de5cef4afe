"""Shared logging helpers.

USAGE:
    from orbitcms.infrastructure.observability.logger_template import log_operation

    async with log_operation(logger, "track.reassign", track_id="abc"):
        await sync.on_update(...)
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any


# Yo, this wraps a unit of work with start/completed/failed logs plus duration_ms. The
# **context kwargs land as extra fields on all three records. On failure it logs with
# exc_info and re-raises, it never swallows.
@asynccontextmanager
async def log_operation(
    logger: logging.Logger,
    operation: str,
    **context: Any,
) -> AsyncIterator[None]:
    """Log operation start/end with automatic timing.

    Logs:
    - {operation}.started with context fields (DEBUG)
    - {operation}.completed with context + duration_ms
    - {operation}.failed with context + duration_ms + error details

    Args:
        logger: Logger of the calling module
        operation: Operation name (e.g., "page.create", "track.reassign")
        **context: Additional fields to include in logs (e.g., track_id="abc")
    """
    start = time.perf_counter()
    logger.debug(f"{operation}.started", extra=context)

    try:
        yield
    except Exception as e:
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.error(
            f"{operation}.failed",
            extra={
                **context,
                "duration_ms": duration_ms,
                "error": str(e),
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        raise

    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        f"{operation}.completed",
        extra={**context, "duration_ms": duration_ms},
    )
