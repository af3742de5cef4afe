"""SQLAlchemy ORM models for the four document collections.

Attribute names match the domain entity field names one to one; the collections map
between them generically. Id lists and tag/group arrays live in JSON columns.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text, event
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from orbitcms.domain.entities import utc_now


# Hey future me - SQLite doesn't preserve timezone info! Datetimes come back naive, so
# attach UTC before handing them to anything that compares with datetime.now(UTC).
def ensure_utc_aware(dt: datetime) -> datetime:
    """Ensure datetime is UTC-aware, assuming naive datetimes are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class TrackModel(TimestampMixin, Base):
    """Audio track document."""

    __tablename__ = "tracks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    author: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[str | None] = mapped_column(String(32), nullable=True)
    listeners: Mapped[str] = mapped_column(String(32), default="0", nullable=False)
    date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    trending: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    audio_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    # Holds zero or one playlist id
    playlists: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)


class PlaylistModel(TimestampMixin, Base):
    """Playlist document; track_count is derived from tracks on every write."""

    __tablename__ = "playlists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    track_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    duration: Mapped[str | None] = mapped_column(String(32), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    tracks: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)


class PageModel(TimestampMixin, Base):
    """CMS page document."""

    __tablename__ = "pages"
    __table_args__ = (Index("ix_pages_slug_unique", "slug", unique=True),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    audio_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    thumbnail_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    groups: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    editor_type: Mapped[str] = mapped_column(String(20), default="quill", nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(60), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(String(160), nullable=True)
    meta_keywords: Mapped[str | None] = mapped_column(String(255), nullable=True)
    popular: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    read_time: Mapped[int | None] = mapped_column(Integer, nullable=True)


class ContactModel(TimestampMixin, Base):
    """Contact form submission."""

    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)


# Hey future me - this is the only place track_count is written. It runs on every flush
# of a playlist row, so add/pull/replace of tracks can never leave the count stale, and
# len() can never go negative.
@event.listens_for(PlaylistModel, "before_insert")
@event.listens_for(PlaylistModel, "before_update")
def _recount_playlist_tracks(_mapper: Any, _connection: Any, target: PlaylistModel) -> None:
    target.track_count = len(target.tracks or [])


__all__ = [
    "Base",
    "ContactModel",
    "PageModel",
    "PlaylistModel",
    "TrackModel",
    "ensure_utc_aware",
]
