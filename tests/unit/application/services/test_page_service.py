"""Tests for page slug handling."""

from typing import Any

import pytest

from orbitcms.application.services import PAGE_LISTING, PageService, QueryBuilder
from orbitcms.domain.entities import Page
from orbitcms.domain.exceptions import (
    DuplicateEntityException,
    DuplicateKeyError,
    EntityNotFoundException,
    ValidationException,
)
from orbitcms.domain.ports import QuerySpec
from orbitcms.infrastructure.persistence import PageCollection


def page_fields(**overrides: Any) -> dict[str, Any]:
    fields = {
        "title": "Heart Health 101",
        "description": "Basics of cardiology",
        "image_url": "https://cdn.example.com/heart.png",
        "thumbnail_url": "https://cdn.example.com/heart-thumb.png",
        "editor_type": "quill",
        "groups": ["cardiology"],
        "content": "<p>Body</p>",
    }
    fields.update(overrides)
    return fields


class BlindPages(PageCollection):
    """Pre-check never sees the competing page, so only the unique index catches it."""

    async def find_one(self, query: QuerySpec) -> Page | None:
        return None


@pytest.fixture
def service(pages: PageCollection) -> PageService:
    return PageService(pages, QueryBuilder(PAGE_LISTING))


async def test_slug_derived_from_title(service: PageService) -> None:
    page = await service.create(page_fields(title="Dr. Smith's Heart: A Guide!"))
    assert page.slug == "dr-smiths-heart-a-guide"


async def test_explicit_slug_is_normalized(service: PageService) -> None:
    page = await service.create(page_fields(slug="  My Custom SLUG  "))
    assert page.slug == "my-custom-slug"


async def test_duplicate_of_derived_slug_is_rejected(service: PageService) -> None:
    first = await service.create(page_fields())

    with pytest.raises(DuplicateEntityException) as exc_info:
        await service.create(page_fields(title="Another title", slug=first.slug))

    assert exc_info.value.message == "A page with this slug already exists"


async def test_insert_race_maps_to_same_duplicate_error(pages: PageCollection) -> None:
    service = PageService(pages, QueryBuilder(PAGE_LISTING))
    await service.create(page_fields())
    blind = PageService(BlindPages(pages._db), QueryBuilder(PAGE_LISTING))

    with pytest.raises(DuplicateEntityException) as exc_info:
        await blind.create(page_fields())

    assert isinstance(exc_info.value.__cause__, DuplicateKeyError)
    assert exc_info.value.message == "A page with this slug already exists"


async def test_slug_without_slug_characters_is_invalid(service: PageService) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.create(page_fields(title="!!!"))
    assert exc_info.value.errors[0].field == "slug"


async def test_update_may_keep_own_slug(service: PageService) -> None:
    page = await service.create(page_fields())
    updated = await service.update(page.id, {"slug": page.slug, "title": "Renamed"})
    assert updated.slug == page.slug
    assert updated.title == "Renamed"


async def test_update_rejects_slug_of_other_page(service: PageService) -> None:
    await service.create(page_fields(title="Taken"))
    other = await service.create(page_fields(title="Mine"))

    with pytest.raises(DuplicateEntityException):
        await service.update(other.id, {"slug": "taken"})


async def test_get_by_slug_is_case_insensitive(service: PageService) -> None:
    page = await service.create(page_fields())
    assert (await service.get_by_slug("  HEART-health-101 ")).id == page.id


async def test_list_excludes_content(service: PageService) -> None:
    await service.create(page_fields())
    result = await service.list_pages({})
    assert result.items[0].content == ""
    assert result.pagination.total_items == 1


async def test_missing_page_raises(service: PageService) -> None:
    with pytest.raises(EntityNotFoundException):
        await service.get_by_slug("nope")
