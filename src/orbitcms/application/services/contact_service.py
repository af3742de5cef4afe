"""Contact form submissions."""

import logging
from collections.abc import Mapping
from typing import Any

from orbitcms.application.services.query_builder import QueryBuilder
from orbitcms.domain.dtos import Paginated
from orbitcms.domain.entities import Contact
from orbitcms.domain.exceptions import EntityNotFoundException
from orbitcms.domain.ports import IDocumentCollection

logger = logging.getLogger(__name__)


class ContactService:
    """Append-only submissions from the public side, listed and deleted by admins."""

    def __init__(
        self, contacts: IDocumentCollection[Contact], query_builder: QueryBuilder
    ) -> None:
        self._contacts = contacts
        self._query_builder = query_builder

    async def submit(
        self, name: str, email: str, mobile: str = "", message: str = ""
    ) -> Contact:
        contact = await self._contacts.insert(
            Contact(
                name=name.strip(),
                email=email.strip().lower(),
                mobile=(mobile or "").strip(),
                message=(message or "").strip(),
            )
        )
        # No personal data in logs
        logger.info("Contact form submitted", extra={"contact_id": contact.id})
        return contact

    async def list_contacts(
        self,
        params: Mapping[str, Any],
        page: int | None = None,
        limit: int | None = None,
    ) -> Paginated[Contact]:
        return await self._query_builder.paginate(self._contacts, params, page, limit)

    async def delete(self, contact_id: str) -> Contact:
        contact = await self._contacts.delete_by_id(contact_id)
        if contact is None:
            raise EntityNotFoundException("Contact", contact_id)
        return contact
