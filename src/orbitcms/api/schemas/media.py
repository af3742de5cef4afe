"""Track and playlist schemas.

Both live in one module because each entity's expanded output embeds the other.
"""

import dataclasses
from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from orbitcms.api.schemas.common import CamelModel, DocumentId, HttpUrlStr
from orbitcms.domain.dtos import PlaylistWithTracks, TrackWithPlaylists
from orbitcms.domain.entities import Playlist, Track

Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


# --- input -------------------------------------------------------------------------


class TrackIn(CamelModel):
    """Track body for create and partial update.

    `playlistId` is not stored as-is: it drives the playlist link. Sending it as null on
    update detaches the track from every playlist; omitting it leaves links alone.
    """

    title: str | None = Field(None, max_length=200)
    author: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    duration: str | None = Field(None, max_length=32)
    listeners: str = Field("0", max_length=32)
    date: str | None = Field(None, max_length=64)
    thumbnail: HttpUrlStr | None = None
    category: str | None = Field(None, max_length=50)
    trending: bool = False
    audio_url: HttpUrlStr | None = None
    playlist_id: DocumentId | None = None


class PlaylistIn(CamelModel):
    """Playlist body for create and partial update. trackCount is never accepted."""

    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=500)
    duration: str | None = Field(None, max_length=32)
    thumbnail: HttpUrlStr | None = None
    created_by: str | None = Field(None, max_length=100)
    tracks: list[DocumentId] = Field(default_factory=list)
    is_public: bool = True
    tags: list[Tag] = Field(default_factory=list, max_length=20)


class AddTracksIn(CamelModel):
    track_ids: list[DocumentId] = Field(..., min_length=1)


# --- output ------------------------------------------------------------------------


class TrackSummaryOut(CamelModel):
    id: str
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
    playlists: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, track: Track) -> "TrackSummaryOut":
        return cls.model_validate(dataclasses.asdict(track))


class PlaylistSummaryOut(CamelModel):
    id: str
    title: str | None = None
    description: str | None = None
    track_count: int = 0
    duration: str | None = None
    thumbnail: str | None = None
    created_by: str | None = None
    tracks: list[str] = Field(default_factory=list)
    is_public: bool = True
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, playlist: Playlist) -> "PlaylistSummaryOut":
        return cls.model_validate(dataclasses.asdict(playlist))


class TrackOut(TrackSummaryOut):
    """Track with `playlists` expanded to documents, or ids when not expanded."""

    playlists: list[PlaylistSummaryOut] | list[str] = Field(default_factory=list)  # type: ignore[assignment]

    @classmethod
    def from_view(cls, view: TrackWithPlaylists) -> "TrackOut":
        data = dataclasses.asdict(view.track)
        if view.playlists is not None:
            data["playlists"] = [PlaylistSummaryOut.from_entity(p) for p in view.playlists]
        return cls.model_validate(data)


class PlaylistOut(PlaylistSummaryOut):
    """Playlist with `tracks` expanded in display order, or ids when not expanded."""

    tracks: list[TrackSummaryOut] | list[str] = Field(default_factory=list)  # type: ignore[assignment]

    @classmethod
    def from_view(cls, view: PlaylistWithTracks) -> "PlaylistOut":
        data = dataclasses.asdict(view.playlist)
        if view.tracks is not None:
            data["tracks"] = [TrackSummaryOut.from_entity(t) for t in view.tracks]
        return cls.model_validate(data)
