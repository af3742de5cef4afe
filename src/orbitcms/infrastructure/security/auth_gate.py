"""Bearer-token AuthGate.

Verifies HS256 JWTs issued elsewhere and turns their claims into a Principal.
Token issuance, user storage and password handling live outside this service.
"""

import logging
from dataclasses import dataclass
from typing import Any

import jwt

from orbitcms.config import Settings
from orbitcms.domain.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    user_id: str
    role: str | None = None
    email: str | None = None

    def has_role(self, role: str) -> bool:
        return self.role == role


def parse_bearer_token(authorization: str) -> str:
    """Strip a case-insensitive "Bearer " prefix from an Authorization header value."""
    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return authorization.strip()


class JWTAuthGate:
    """Resolve an Authorization header into a Principal or reject it."""

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.security.jwt_secret
        self._algorithm = settings.security.jwt_algorithm
        self._admin_role = settings.security.admin_role

    def authenticate(self, authorization: str | None) -> Principal:
        """Return the principal for a bearer credential.

        Raises:
            AuthenticationError: header missing, token invalid/expired, no user id,
                or the account is flagged inactive.
        """
        if not authorization or not authorization.strip():
            raise AuthenticationError("Authentication required")

        token = parse_bearer_token(authorization)
        if not token:
            raise AuthenticationError("Authentication required")

        try:
            claims: dict[str, Any] = jwt.decode(
                token, self._secret, algorithms=[self._algorithm]
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except jwt.InvalidTokenError as e:
            logger.info("Rejected bearer token", extra={"reason": type(e).__name__})
            raise AuthenticationError("Authentication failed") from e

        user_id = claims.get("userId") or claims.get("sub")
        if not user_id:
            raise AuthenticationError("Authentication failed")
        if claims.get("isActive") is False:
            raise AuthenticationError("User not found or inactive")

        return Principal(
            user_id=str(user_id),
            role=claims.get("role"),
            email=claims.get("email"),
        )

    def require_admin(self, principal: Principal) -> Principal:
        """Return the principal if it carries the admin role.

        Raises:
            AuthorizationError: principal is not an admin
        """
        if not principal.has_role(self._admin_role):
            raise AuthorizationError("Admin privileges required")
        return principal
