"""Pagination request and response blocks."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    """1-based page window over a sorted result set."""

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PaginationInfo:
    """Pagination block returned alongside every list response."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def from_total(cls, request: PageRequest, total: int) -> "PaginationInfo":
        return cls(
            current_page=request.page,
            total_pages=math.ceil(total / request.limit),
            total_items=total,
            items_per_page=request.limit,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
        }
