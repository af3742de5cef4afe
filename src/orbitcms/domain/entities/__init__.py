"""Domain entities.

Entities are plain documents: every field maps 1:1 onto a stored attribute. Cross-document
links are id lists (Track.playlists, Playlist.tracks); expanding them into full documents
is a read-time concern handled by the services.
"""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


def new_id() -> str:
    """Generate an opaque document id."""
    return str(uuid.uuid4())


class EditorType(str, Enum):
    """Rich-text editor a page body was authored with."""

    SUMMERNOTE = "summernote"
    QUILL = "quill"


class PageGroup(str, Enum):
    """Allowed page groups."""

    BLOGS = "blogs"
    CARDIOLOGY = "cardiology"
    CASE_STUDIES = "case-studies"


@dataclass
class Track:
    """Audio track.

    `playlists` holds at most one playlist id in practice, but is modelled as a list
    so the link stays symmetric with Playlist.tracks.
    """

    id: str = field(default_factory=new_id)
    title: str | None = None
    author: str | None = None
    description: str | None = None
    duration: str | None = None
    listeners: str = "0"
    date: str | None = None
    thumbnail: str | None = None
    category: str | None = None
    trending: bool = False
    audio_url: str | None = None
    playlists: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass
class Playlist:
    """Ordered collection of track ids.

    track_count is a cached projection of len(tracks); the store recomputes it on
    every write, so never set it by hand.
    """

    id: str = field(default_factory=new_id)
    title: str | None = None
    description: str | None = None
    track_count: int = 0
    duration: str | None = None
    thumbnail: str | None = None
    created_by: str | None = None
    tracks: list[str] = field(default_factory=list)
    is_public: bool = True
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass
class Page:
    """CMS page addressed publicly by its unique slug."""

    id: str = field(default_factory=new_id)
    title: str = ""
    description: str = ""
    image_url: str = ""
    audio_url: str | None = None
    thumbnail_url: str = ""
    groups: list[str] = field(default_factory=list)
    editor_type: str = EditorType.QUILL.value
    slug: str = ""
    content: str | None = ""
    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    popular: bool = False
    tags: list[str] = field(default_factory=list)
    category: str | None = None
    read_time: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


@dataclass
class Contact:
    """Contact form submission."""

    id: str = field(default_factory=new_id)
    name: str = ""
    email: str = ""
    mobile: str = ""
    message: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)


__all__ = [
    "Contact",
    "EditorType",
    "Page",
    "PageGroup",
    "Playlist",
    "Track",
    "new_id",
    "utc_now",
]
