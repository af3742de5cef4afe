"""Configuration module for orbitcms."""

from .settings import (
    DatabaseSettings,
    Environment,
    ObservabilitySettings,
    PaginationSettings,
    SecuritySettings,
    Settings,
    get_settings,
)

__all__ = [
    "DatabaseSettings",
    "Environment",
    "ObservabilitySettings",
    "PaginationSettings",
    "SecuritySettings",
    "Settings",
    "get_settings",
]
