"""Page service: CRUD with slug derivation and uniqueness."""

import logging
from collections.abc import Mapping
from typing import Any

from orbitcms.application.services.query_builder import QueryBuilder
from orbitcms.domain.dtos import Paginated
from orbitcms.domain.entities import Page
from orbitcms.domain.exceptions import (
    DuplicateEntityException,
    DuplicateKeyError,
    EntityNotFoundException,
    ValidationException,
)
from orbitcms.domain.ports import IDocumentCollection, QuerySpec, UpdateSpec
from orbitcms.domain.value_objects import slugify

logger = logging.getLogger(__name__)

DUPLICATE_SLUG_MESSAGE = "A page with this slug already exists"

WRITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "image_url",
        "audio_url",
        "thumbnail_url",
        "groups",
        "editor_type",
        "slug",
        "content",
        "meta_title",
        "meta_description",
        "meta_keywords",
        "popular",
        "tags",
        "category",
        "read_time",
    }
)


class PageService:
    """Service for CMS page operations."""

    def __init__(self, pages: IDocumentCollection[Page], query_builder: QueryBuilder) -> None:
        self._pages = pages
        self._query_builder = query_builder

    async def create(self, fields: Mapping[str, Any]) -> Page:
        """Create a page; the slug comes from `slug` if given, else from the title.

        Raises:
            ValidationException: slug normalizes to an empty string
            DuplicateEntityException: slug already taken (pre-check or insert race)
        """
        values = self._writable(fields)
        values["slug"] = self._resolve_slug(values.get("slug") or values.get("title") or "")
        await self._ensure_slug_free(values["slug"])

        try:
            page = await self._pages.insert(Page(**values))
        except DuplicateKeyError as e:
            # Lost the race between the pre-check and the insert
            raise self._duplicate(values["slug"]) from e

        logger.info("Page created", extra={"page_id": page.id, "slug": page.slug})
        return page

    async def get_by_id(self, page_id: str) -> Page:
        page = await self._pages.find_by_id(page_id)
        if page is None:
            raise EntityNotFoundException("Page", page_id)
        return page

    async def get_by_slug(self, slug: str) -> Page:
        normalized = slug.strip().lower()
        page = await self._pages.find_one(QuerySpec(equals={"slug": normalized}))
        if page is None:
            raise EntityNotFoundException("Page", normalized)
        return page

    async def list_pages(
        self,
        params: Mapping[str, Any],
        page: int | None = None,
        limit: int | None = None,
    ) -> Paginated[Page]:
        """List pages newest first; bodies are left out of list results."""
        return await self._query_builder.paginate(self._pages, params, page, limit)

    async def update(self, page_id: str, fields: Mapping[str, Any]) -> Page:
        """Partial update. A supplied slug is normalized and re-checked against other pages."""
        values = self._writable(fields)
        if "slug" in values:
            values["slug"] = self._resolve_slug(values["slug"] or "")
            await self._ensure_slug_free(values["slug"], exclude_id=page_id)

        try:
            page = await self._pages.update_by_id(page_id, UpdateSpec(set=values))
        except DuplicateKeyError as e:
            raise self._duplicate(values.get("slug", "")) from e
        if page is None:
            raise EntityNotFoundException("Page", page_id)
        return page

    async def delete(self, page_id: str) -> Page:
        page = await self._pages.delete_by_id(page_id)
        if page is None:
            raise EntityNotFoundException("Page", page_id)
        return page

    async def _ensure_slug_free(self, slug: str, exclude_id: str | None = None) -> None:
        query = QuerySpec(
            equals={"slug": slug},
            not_equals={"id": exclude_id} if exclude_id else {},
        )
        if await self._pages.find_one(query) is not None:
            raise self._duplicate(slug)

    @staticmethod
    def _resolve_slug(source: str) -> str:
        slug = slugify(source)
        if not slug:
            raise ValidationException.for_field(
                "slug", "Slug must contain at least one letter or digit"
            )
        return slug

    @staticmethod
    def _duplicate(slug: str) -> DuplicateEntityException:
        return DuplicateEntityException("Page", slug, message=DUPLICATE_SLUG_MESSAGE)

    @staticmethod
    def _writable(fields: Mapping[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}
