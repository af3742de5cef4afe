"""Contact form schemas."""

import dataclasses
from datetime import datetime

from pydantic import Field, field_validator

from orbitcms.api.schemas.common import CamelModel
from orbitcms.domain.entities import Contact


class ContactIn(CamelModel):
    """Public contact form. `description` is accepted as an alias of `message`."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    mobile: str = Field("", max_length=20)
    message: str | None = Field(None, max_length=5000)
    description: str | None = Field(None, max_length=5000)

    @field_validator("email")
    @classmethod
    def _email_has_at(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("Email is required and must be a valid email address")
        return value.lower()

    @property
    def body(self) -> str:
        return self.message or self.description or ""


class ContactOut(CamelModel):
    id: str
    name: str
    email: str
    mobile: str = ""
    message: str = ""
    created_at: datetime

    @classmethod
    def from_entity(cls, contact: Contact) -> "ContactOut":
        return cls.model_validate(dataclasses.asdict(contact))
