"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

E = TypeVar("E")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Hey future me, QuerySpec is the store-neutral description of a list query. Field names
# are entity attribute names (snake_case), never API parameter names - the QueryBuilder
# does that translation. Empty dicts mean "no constraint", never "match empty".
@dataclass(frozen=True)
class QuerySpec:
    """Filter/sort/window specification for a collection query.

    Attributes:
        equals: field -> value, exact match
        not_equals: field -> value, exclusion (used for uniqueness checks)
        contains: array field -> member that must be present
        search: case-insensitive substring, OR-ed across search_fields
        search_fields: text fields searched when `search` is set
        exclude_fields: heavy fields left unloaded (list views)
        sort: ordered (field, direction) pairs
        skip: documents to skip
        limit: maximum documents to return, None for all
    """

    equals: Mapping[str, Any] = field(default_factory=dict)
    not_equals: Mapping[str, Any] = field(default_factory=dict)
    contains: Mapping[str, str] = field(default_factory=dict)
    search: str | None = None
    search_fields: tuple[str, ...] = ()
    exclude_fields: tuple[str, ...] = ()
    sort: tuple[tuple[str, SortDirection], ...] = (("created_at", SortDirection.DESC),)
    skip: int = 0
    limit: int | None = None


@dataclass(frozen=True)
class UpdateSpec:
    """Single-document patch, applied atomically by the store.

    `add_to_set` appends values not already present (set semantics, order kept);
    `pull` removes every occurrence of the given values. Both are idempotent, so a
    replayed step never duplicates or over-removes.
    """

    set: Mapping[str, Any] = field(default_factory=dict)
    add_to_set: Mapping[str, Sequence[str]] = field(default_factory=dict)
    pull: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.set or self.add_to_set or self.pull)


class IDocumentCollection(ABC, Generic[E]):
    """Per-collection document store contract.

    Every method is its own unit of atomicity: a call either fully applies to one
    document or not at all. There is no cross-call transaction.
    """

    @abstractmethod
    async def insert(self, document: E) -> E:
        """Insert a document. Raises DuplicateKeyError on unique index violation."""

    @abstractmethod
    async def find_by_id(self, document_id: str) -> E | None:
        """Return the document or None."""

    @abstractmethod
    async def find_by_ids(self, document_ids: Sequence[str]) -> list[E]:
        """Batched lookup for reference expansion.

        Results follow the order of `document_ids`; ids that do not resolve are dropped.
        """

    @abstractmethod
    async def find_one(self, query: QuerySpec) -> E | None:
        """Return the first matching document or None."""

    @abstractmethod
    async def find(self, query: QuerySpec) -> list[E]:
        """Return matching documents, sorted and windowed."""

    @abstractmethod
    async def count(self, query: QuerySpec) -> int:
        """Count matching documents (sort and window ignored)."""

    @abstractmethod
    async def update_by_id(self, document_id: str, update: UpdateSpec) -> E | None:
        """Apply a patch and return the updated document, or None if absent."""

    @abstractmethod
    async def delete_by_id(self, document_id: str) -> E | None:
        """Delete and return the removed document, or None if absent."""


__all__ = [
    "IDocumentCollection",
    "QuerySpec",
    "SortDirection",
    "UpdateSpec",
]
