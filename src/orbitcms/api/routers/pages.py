"""Page endpoints.

Pages are read publicly by slug; mutations are addressed by id.
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from orbitcms.api.dependencies import get_page_service, require_principal
from orbitcms.api.schemas.common import dump, envelope
from orbitcms.api.schemas.pages import PageCreate, PageOut, PageSummaryOut, PageUpdate
from orbitcms.application.services import PageService
from orbitcms.infrastructure.security import Principal

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_pages(
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Page size (max 100)"),
    group: str | None = Query(None, description="Pages in this group"),
    tag: str | None = Query(None, description="Pages carrying this tag"),
    category: str | None = Query(None, description="Exact category"),
    search: str | None = Query(None, description="Substring of title/description/content"),
    service: PageService = Depends(get_page_service),
) -> dict[str, Any]:
    """List pages, newest first, without their content."""
    result = await service.list_pages(
        {"group": group, "tag": tag, "category": category, "search": search}, page, limit
    )
    return envelope(
        {
            "pages": [dump(PageSummaryOut.from_entity(p)) for p in result.items],
            "pagination": result.pagination.to_dict(),
        }
    )


# Hey future me - this must stay registered BEFORE /{slug}, otherwise "by-id" is swallowed
# as a slug and the id lands in a 404.
@router.get("/by-id/{page_id}")
async def get_page_by_id(
    page_id: UUID,
    service: PageService = Depends(get_page_service),
) -> dict[str, Any]:
    page = await service.get_by_id(str(page_id))
    return envelope(dump(PageOut.from_entity(page)))


@router.get("/{slug}")
async def get_page_by_slug(
    slug: str,
    service: PageService = Depends(get_page_service),
) -> dict[str, Any]:
    page = await service.get_by_slug(slug)
    return envelope(dump(PageOut.from_entity(page)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_page(
    body: PageCreate,
    _principal: Principal = Depends(require_principal),
    service: PageService = Depends(get_page_service),
) -> dict[str, Any]:
    page = await service.create(body.model_dump(mode="json"))
    return envelope(dump(PageOut.from_entity(page)), "Page created successfully")


@router.put("/{page_id}")
async def update_page(
    page_id: UUID,
    body: PageUpdate,
    _principal: Principal = Depends(require_principal),
    service: PageService = Depends(get_page_service),
) -> dict[str, Any]:
    page = await service.update(str(page_id), body.model_dump(mode="json", exclude_unset=True))
    return envelope(dump(PageOut.from_entity(page)), "Page updated successfully")


@router.delete("/{page_id}")
async def delete_page(
    page_id: UUID,
    _principal: Principal = Depends(require_principal),
    service: PageService = Depends(get_page_service),
) -> dict[str, Any]:
    page = await service.delete(str(page_id))
    return envelope({"id": page.id, "title": page.title}, "Page deleted successfully")
