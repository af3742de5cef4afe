"""Application settings loaded from environment variables and `.env`.

Nested groups are addressed with a double underscore, e.g. ``DATABASE__URL`` or
``SECURITY__JWT_SECRET``.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class DatabaseSettings(BaseModel):
    """Document store connection settings."""

    url: str = "sqlite+aiosqlite:///./data/orbitcms.db"
    echo: bool = False
    pool_pre_ping: bool = True
    # Pool sizing only applies to PostgreSQL
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800
    # Create missing tables on startup
    auto_create: bool = True


class SecuritySettings(BaseModel):
    """Bearer token verification settings."""

    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    admin_role: str = "admin"


class ObservabilitySettings(BaseModel):
    """Logging settings."""

    log_json_format: bool = False
    log_request_body: bool = False


class PaginationSettings(BaseModel):
    """List endpoint defaults."""

    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = "orbitcms"
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"  # nosec B104
    port: int = 8000

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)

    @property
    def is_development(self) -> bool:
        """Whether internal error detail may be exposed to clients."""
        return self.environment == Environment.DEVELOPMENT

    def get_sqlite_db_path(self) -> Path | None:
        """Return the database file path for file-based SQLite URLs, else None."""
        url = self.database.url
        if not url.startswith("sqlite") or ":memory:" in url:
            return None
        _, _, path = url.partition(":///")
        return Path(path) if path else None


# Hey future me - lru_cache makes this a process-wide settings instance. Tests that need
# different settings should build Settings(...) directly and hand it to create_app()
# instead of poking environment variables after the first call.
@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
