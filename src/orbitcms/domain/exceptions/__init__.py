"""Domain exceptions."""

from dataclasses import dataclass
from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is kept as an attribute so handlers never parse str(exc).
    # Don't raise this directly - pick a subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an id or slug does not resolve to a stored document."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationException(DomainException):
    """Raised when input fails validation before any mutation happens.

    Carries the structured list of field errors so the API layer can return
    all of them in one response.
    """

    def __init__(
        self, message: str = "Validation failed", errors: list[FieldError] | None = None
    ) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationException":
        return cls(errors=[FieldError(field=field, message=message)])


class DuplicateEntityException(DomainException):
    """Raised when a uniqueness rule (e.g. page slug) would be violated."""

    def __init__(
        self, entity_type: str, entity_id: Any, message: str | None = None
    ) -> None:
        super().__init__(message or f"{entity_type} with id {entity_id} already exists")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateKeyError(DomainException):
    """Raised by the document store when a unique index rejects a write.

    This is the store-level signal; services translate it into
    DuplicateEntityException so races surface the same way as pre-checks.
    """

    def __init__(self, collection: str, key: str | None = None) -> None:
        super().__init__(f"Duplicate key in {collection}" + (f" on {key}" if key else ""))
        self.collection = collection
        self.key = key


class AuthenticationError(DomainException):
    """Missing or invalid bearer credential.

    HTTP Status: 401
    """

    pass


class AuthorizationError(DomainException):
    """Authenticated principal lacks the role required for the action.

    HTTP Status: 403
    """

    pass


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "DomainException",
    "DuplicateEntityException",
    "DuplicateKeyError",
    "EntityNotFoundException",
    "FieldError",
    "ValidationException",
]
