"""Contact form endpoints: public submission, admin review."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from orbitcms.api.dependencies import get_contact_service, require_admin
from orbitcms.api.schemas.common import dump, envelope
from orbitcms.api.schemas.contacts import ContactIn, ContactOut
from orbitcms.application.services import ContactService
from orbitcms.infrastructure.security import Principal

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/contact")
async def submit_contact(
    body: ContactIn,
    service: ContactService = Depends(get_contact_service),
) -> dict[str, Any]:
    """Public contact form submission."""
    contact = await service.submit(
        name=body.name, email=body.email, mobile=body.mobile, message=body.body
    )
    out = dump(ContactOut.from_entity(contact))
    return envelope(
        {
            "id": contact.id,
            "submittedAt": out["createdAt"],
            "contact": {key: out[key] for key in ("name", "email", "mobile", "message")},
        },
        "Contact form submitted successfully",
    )


@router.get("/contacts")
async def list_contacts(
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Page size (max 100)"),
    search: str | None = Query(None, description="Substring of name/email/message"),
    _admin: Principal = Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
) -> dict[str, Any]:
    result = await service.list_contacts({"search": search}, page, limit)
    return envelope(
        {
            "contacts": [dump(ContactOut.from_entity(c)) for c in result.items],
            "pagination": result.pagination.to_dict(),
        }
    )


@router.delete("/contacts/{contact_id}")
async def delete_contact(
    contact_id: UUID,
    _admin: Principal = Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
) -> dict[str, Any]:
    contact = await service.delete(str(contact_id))
    return envelope({"id": contact.id, "name": contact.name}, "Contact deleted successfully")
