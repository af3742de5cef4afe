"""Custom exception handlers for the FastAPI application.

Every failure leaves the API in the same envelope as success responses:
{"success": false, "message": ..., "errors"?: [{field, message}], "error"?: detail}.
Internal detail (`error`) is only included in development.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orbitcms.config import Settings
from orbitcms.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateEntityException,
    DuplicateKeyError,
    EntityNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the offending field name
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def _failure(
    status_code: int,
    message: str,
    *,
    errors: list[dict[str, str]] | None = None,
    error: str | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _request_validation_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into [{field, message}], camelCase field names as sent."""
    errors = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        # "Value error, must be a valid URL" -> "must be a valid URL"
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        errors.append({"field": _field_name(error.get("loc", ())), "message": message})
    return errors


# Hey future me, register these during app setup, before the first request. Domain
# exceptions raised anywhere (services, dependencies like the AuthGate) land here and
# never leak as raw 500s.
def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Register handlers for domain, validation, HTTP and unexpected exceptions.

    Args:
        app: FastAPI application instance
        settings: Decides whether internal error detail is exposed
    """

    @app.exception_handler(ValidationException)
    async def validation_exception_handler(
        request: Request, exc: ValidationException
    ) -> JSONResponse:
        logger.warning(
            "Validation error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "fields": [e.field for e in exc.errors]},
        )
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            exc.message,
            errors=[e.to_dict() for e in exc.errors],
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = _request_validation_errors(exc)
        logger.warning(
            "Request validation failed at %s",
            request.url.path,
            extra={"path": request.url.path, "fields": [e["field"] for e in errors]},
        )
        return _failure(status.HTTP_400_BAD_REQUEST, "Validation failed", errors=errors)

    @app.exception_handler(EntityNotFoundException)
    async def entity_not_found_exception_handler(
        request: Request, exc: EntityNotFoundException
    ) -> JSONResponse:
        logger.info(
            "Entity not found at %s: %s %s",
            request.url.path,
            exc.entity_type,
            exc.entity_id,
            extra={
                "path": request.url.path,
                "entity_type": exc.entity_type,
                "entity_id": str(exc.entity_id),
            },
        )
        return _failure(status.HTTP_404_NOT_FOUND, f"{exc.entity_type} not found")

    @app.exception_handler(DuplicateEntityException)
    async def duplicate_entity_exception_handler(
        request: Request, exc: DuplicateEntityException
    ) -> JSONResponse:
        logger.warning(
            "Duplicate entity at %s: %s %s",
            request.url.path,
            exc.entity_type,
            exc.entity_id,
            extra={
                "path": request.url.path,
                "entity_type": exc.entity_type,
                "entity_id": str(exc.entity_id),
            },
        )
        return _failure(status.HTTP_400_BAD_REQUEST, exc.message)

    # Store-level unique violation that no service translated
    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_error_handler(
        request: Request, exc: DuplicateKeyError
    ) -> JSONResponse:
        logger.warning(
            "Duplicate key at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path},
        )
        return _failure(status.HTTP_400_BAD_REQUEST, "Duplicate key")

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        logger.info(
            "Authentication failed at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path},
        )
        response = _failure(status.HTTP_401_UNAUTHORIZED, exc.message)
        response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(
        request: Request, exc: AuthorizationError
    ) -> JSONResponse:
        logger.warning(
            "Forbidden at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path},
        )
        return _failure(status.HTTP_403_FORBIDDEN, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "HTTP %s at %s: %s",
                exc.status_code,
                request.url.path,
                exc.detail,
                extra={"path": request.url.path, "status_code": exc.status_code},
            )
        return _failure(exc.status_code, str(exc.detail))

    # Yo, the catch-all. Production gets a generic message only; development additionally
    # gets the exception text under "error" so a local client can see what blew up.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error at %s %s",
            request.method,
            request.url.path,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            error=str(exc) if settings.is_development else None,
        )
