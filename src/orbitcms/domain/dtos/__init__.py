"""Read models returned by the services.

Entities keep links as id lists; these DTOs carry the expanded ("populated") form
when a read asks for it.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from orbitcms.domain.entities import Playlist, Track
from orbitcms.domain.value_objects import PaginationInfo

T = TypeVar("T")


@dataclass
class TrackWithPlaylists:
    """Track plus its playlists, or None when not expanded."""

    track: Track
    playlists: list[Playlist] | None = None


@dataclass
class PlaylistWithTracks:
    """Playlist plus its tracks in display order, or None when not expanded."""

    playlist: Playlist
    tracks: list[Track] | None = None


@dataclass
class Paginated(Generic[T]):
    """One page of results and its pagination block."""

    items: list[T]
    pagination: PaginationInfo


@dataclass
class SyncResult:
    """Outcome of a relationship sync run.

    `failures` lists the steps that were logged and skipped; an empty list means both
    sides of the link were written.
    """

    track: Track
    failures: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


__all__ = ["Paginated", "PlaylistWithTracks", "SyncResult", "TrackWithPlaylists"]
