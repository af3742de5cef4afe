"""Page schemas."""

import dataclasses
from datetime import datetime
from typing import Annotated, Any

from pydantic import Field, StringConstraints, field_validator

from orbitcms.api.schemas.common import CamelModel, HttpUrlStr
from orbitcms.domain.entities import EditorType, Page, PageGroup

Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class PageCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=500)
    image_url: HttpUrlStr
    audio_url: str | None = Field(None, max_length=2048)
    thumbnail_url: HttpUrlStr
    groups: list[PageGroup] = Field(default_factory=list, max_length=10)
    editor_type: EditorType
    slug: str | None = Field(None, max_length=100)
    content: str = ""
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)
    meta_keywords: str | None = Field(None, max_length=255)
    popular: bool = False
    tags: list[Tag] = Field(default_factory=list, max_length=20)
    category: str | None = Field(None, max_length=100)
    read_time: int | None = Field(None, ge=1, le=999)


class PageUpdate(CamelModel):
    """Partial update: only supplied fields are validated and written."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=500)
    image_url: HttpUrlStr | None = None
    audio_url: str | None = Field(None, max_length=2048)
    thumbnail_url: HttpUrlStr | None = None
    groups: list[PageGroup] | None = Field(None, max_length=10)
    editor_type: EditorType | None = None
    slug: str | None = Field(None, max_length=100)
    content: str | None = None
    meta_title: str | None = Field(None, max_length=60)
    meta_description: str | None = Field(None, max_length=160)
    meta_keywords: str | None = Field(None, max_length=255)
    popular: bool | None = None
    tags: list[Tag] | None = Field(None, max_length=20)
    category: str | None = Field(None, max_length=100)
    read_time: int | None = Field(None, ge=1, le=999)

    # Omitted fields never reach this validator; an explicit null for a required
    # field must not overwrite the stored value.
    @field_validator(
        "title",
        "description",
        "image_url",
        "thumbnail_url",
        "editor_type",
        "groups",
        "tags",
        "popular",
        "content",
        mode="before",
    )
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


class PageSummaryOut(CamelModel):
    """List view: everything but the body."""

    id: str
    title: str
    description: str
    image_url: str
    audio_url: str | None = None
    thumbnail_url: str
    groups: list[str] = Field(default_factory=list)
    editor_type: str
    slug: str
    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    popular: bool = False
    tags: list[str] = Field(default_factory=list)
    category: str | None = None
    read_time: int | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, page: Page) -> "PageSummaryOut":
        return cls.model_validate(dataclasses.asdict(page))


class PageOut(PageSummaryOut):
    content: str | None = ""
