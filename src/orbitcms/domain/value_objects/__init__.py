"""Value objects shared across services."""

from .pagination import PageRequest, PaginationInfo
from .slug import SLUG_MAX_LENGTH, slugify

__all__ = ["PageRequest", "PaginationInfo", "SLUG_MAX_LENGTH", "slugify"]
