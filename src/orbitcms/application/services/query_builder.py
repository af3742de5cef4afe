"""Translate list-request parameters into a QuerySpec.

Each collection gets a ListingConfig naming which request parameters map onto which
stored fields and how they match. Missing parameters never become constraints: None,
"" and whitespace-only strings are all treated as "not supplied".
"""

from collections.abc import Mapping
import dataclasses
from dataclasses import dataclass, field
from typing import Any, TypeVar

from orbitcms.domain.dtos import Paginated
from orbitcms.domain.exceptions import FieldError, ValidationException
from orbitcms.domain.ports import IDocumentCollection, QuerySpec, SortDirection
from orbitcms.domain.value_objects import PageRequest, PaginationInfo

E = TypeVar("E")

NEWEST_FIRST: tuple[tuple[str, SortDirection], ...] = (("created_at", SortDirection.DESC),)


@dataclass(frozen=True)
class ListingConfig:
    """Parameter-to-field mapping for one collection's list endpoint.

    Attributes:
        equals: request param -> field compared for equality
        contains: request param -> array field that must contain the value
        search_fields: text fields matched by the `search` param (OR-ed)
        exclude_fields: fields left out of list results
    """

    equals: Mapping[str, str] = field(default_factory=dict)
    contains: Mapping[str, str] = field(default_factory=dict)
    search_fields: tuple[str, ...] = ()
    exclude_fields: tuple[str, ...] = ()


TRACK_LISTING = ListingConfig(
    equals={"category": "category", "author": "author"},
    search_fields=("title", "description", "author", "category"),
)

PLAYLIST_LISTING = ListingConfig(
    equals={"createdBy": "created_by", "isPublic": "is_public"},
    contains={"tag": "tags"},
    search_fields=("title", "description", "created_by"),
)

PAGE_LISTING = ListingConfig(
    equals={"category": "category"},
    contains={"group": "groups", "tag": "tags"},
    search_fields=("title", "description", "content"),
    exclude_fields=("content",),
)

CONTACT_LISTING = ListingConfig(
    search_fields=("name", "email", "message"),
)


def _supplied(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class QueryBuilder:
    """Build filter/sort/window specifications for one collection."""

    def __init__(
        self, config: ListingConfig, default_limit: int = 10, max_limit: int = 100
    ) -> None:
        self._config = config
        self._default_limit = default_limit
        self._max_limit = max_limit

    def page_request(self, page: int | None = None, limit: int | None = None) -> PageRequest:
        """Validate the requested window.

        Raises:
            ValidationException: page < 1, or limit outside 1..max_limit
        """
        page = 1 if page is None else page
        limit = self._default_limit if limit is None else limit
        errors: list[FieldError] = []
        if page < 1:
            errors.append(FieldError("page", "Page must be a positive integer"))
        if limit < 1 or limit > self._max_limit:
            errors.append(
                FieldError("limit", f"Limit must be between 1 and {self._max_limit}")
            )
        if errors:
            raise ValidationException(errors=errors)
        return PageRequest(page=page, limit=limit)

    def filters(self, params: Mapping[str, Any]) -> QuerySpec:
        """Build the filter part only (used for counting)."""
        equals = {
            field_name: _clean(params[param])
            for param, field_name in self._config.equals.items()
            if _supplied(params.get(param))
        }
        contains = {
            field_name: _clean(params[param])
            for param, field_name in self._config.contains.items()
            if _supplied(params.get(param))
        }
        search = params.get("search")
        return QuerySpec(
            equals=equals,
            contains=contains,
            search=_clean(search) if _supplied(search) and self._config.search_fields else None,
            search_fields=self._config.search_fields,
            exclude_fields=self._config.exclude_fields,
            sort=NEWEST_FIRST,
        )

    def build(self, params: Mapping[str, Any], page_request: PageRequest) -> QuerySpec:
        """Build the complete list query: filters, newest-first sort, window."""
        return dataclasses.replace(
            self.filters(params), skip=page_request.skip, limit=page_request.limit
        )

    async def paginate(
        self,
        collection: IDocumentCollection[E],
        params: Mapping[str, Any],
        page: int | None = None,
        limit: int | None = None,
    ) -> Paginated[E]:
        """Run the list query and its count against a collection."""
        page_request = self.page_request(page, limit)
        query = self.build(params, page_request)
        items = await collection.find(query)
        total = await collection.count(query)
        return Paginated(
            items=items,
            pagination=PaginationInfo.from_total(page_request, total),
        )

