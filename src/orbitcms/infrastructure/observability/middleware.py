"""Middleware for observability: request/response logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from orbitcms.infrastructure.observability.logging import (
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


# Hey future me, add this FIRST so the correlation id is in context before any handler
# logs. log_request_body stays off outside local debugging: page bodies are large and
# contact submissions carry personal data.
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request/response pair and echo the correlation id header."""

    def __init__(self, app: ASGIApp, log_request_body: bool = False) -> None:
        super().__init__(app)
        self.log_request_body = log_request_body

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        set_correlation_id(request.headers.get(CORRELATION_HEADER))

        method = request.method
        path = request.url.path
        extra = {
            "method": method,
            "path": path,
            "query_params": str(request.query_params),
            "client_ip": request.client.host if request.client else "unknown",
        }
        if self.log_request_body and method in {"POST", "PUT", "PATCH"}:
            body = await request.body()
            extra["body"] = body[:2048].decode("utf-8", errors="replace")
        logger.info(f"→ {method} {path}", extra=extra)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"Request failed: {method} {path}",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": int((time.perf_counter() - start_time) * 1000),
                    "error_type": type(e).__name__,
                },
            )
            raise

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        marker = "✓" if response.status_code < 400 else "✗"
        logger.info(
            f"{marker} {method} {path} → {response.status_code} ({duration_ms}ms)",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        response.headers[CORRELATION_HEADER] = get_correlation_id()
        return response
