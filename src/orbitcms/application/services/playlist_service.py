"""Playlist service.

Playlist-side membership edits (add tracks, remove track) only touch the playlist's own
`tracks` array; the array is the source of truth for those operations and track_count
follows from it on save.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from orbitcms.application.services.query_builder import QueryBuilder
from orbitcms.domain.dtos import Paginated, PlaylistWithTracks
from orbitcms.domain.entities import Playlist, Track
from orbitcms.domain.exceptions import EntityNotFoundException
from orbitcms.domain.ports import IDocumentCollection, UpdateSpec

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = frozenset(
    {"title", "description", "duration", "thumbnail", "created_by", "tracks", "is_public", "tags"}
)


def _unique(ids: Sequence[str]) -> list[str]:
    """Drop repeated ids, keeping first occurrence order."""
    return list(dict.fromkeys(ids))


class PlaylistService:
    """Service for playlist management operations."""

    def __init__(
        self,
        playlists: IDocumentCollection[Playlist],
        tracks: IDocumentCollection[Track],
        query_builder: QueryBuilder,
    ) -> None:
        self._playlists = playlists
        self._tracks = tracks
        self._query_builder = query_builder

    async def create(self, fields: Mapping[str, Any]) -> PlaylistWithTracks:
        values = self._writable(fields)
        if "tracks" in values:
            values["tracks"] = _unique(values["tracks"])
        playlist = await self._playlists.insert(Playlist(**values))
        logger.info(
            "Playlist created",
            extra={"playlist_id": playlist.id, "track_count": playlist.track_count},
        )
        return (await self._expand([playlist], True))[0]

    async def get(self, playlist_id: str, expand: bool = True) -> PlaylistWithTracks:
        playlist = await self._playlists.find_by_id(playlist_id)
        if playlist is None:
            raise EntityNotFoundException("Playlist", playlist_id)
        return (await self._expand([playlist], expand))[0]

    async def list_playlists(
        self,
        params: Mapping[str, Any],
        page: int | None = None,
        limit: int | None = None,
        expand: bool = True,
    ) -> Paginated[PlaylistWithTracks]:
        result = await self._query_builder.paginate(self._playlists, params, page, limit)
        return Paginated(
            items=await self._expand(result.items, expand),
            pagination=result.pagination,
        )

    async def update(
        self, playlist_id: str, fields: Mapping[str, Any]
    ) -> PlaylistWithTracks:
        values = self._writable(fields)
        if "tracks" in values:
            values["tracks"] = _unique(values["tracks"])
        playlist = await self._playlists.update_by_id(playlist_id, UpdateSpec(set=values))
        if playlist is None:
            raise EntityNotFoundException("Playlist", playlist_id)
        return (await self._expand([playlist], True))[0]

    async def delete(self, playlist_id: str) -> Playlist:
        """Delete a playlist; member tracks keep their (now dangling) reference."""
        playlist = await self._playlists.delete_by_id(playlist_id)
        if playlist is None:
            raise EntityNotFoundException("Playlist", playlist_id)
        if playlist.tracks:
            logger.warning(
                "Deleted playlist still referenced by its tracks",
                extra={"playlist_id": playlist.id, "track_ids": playlist.tracks},
            )
        return playlist

    async def add_tracks(
        self, playlist_id: str, track_ids: Sequence[str]
    ) -> PlaylistWithTracks:
        """Append tracks not already present; ids already in the playlist are skipped."""
        playlist = await self._playlists.update_by_id(
            playlist_id, UpdateSpec(add_to_set={"tracks": _unique(track_ids)})
        )
        if playlist is None:
            raise EntityNotFoundException("Playlist", playlist_id)
        return (await self._expand([playlist], True))[0]

    async def remove_track(self, playlist_id: str, track_id: str) -> PlaylistWithTracks:
        """Filter a track id out of the playlist. Removing an absent id is a no-op."""
        playlist = await self._playlists.update_by_id(
            playlist_id, UpdateSpec(pull={"tracks": [track_id]})
        )
        if playlist is None:
            raise EntityNotFoundException("Playlist", playlist_id)
        return (await self._expand([playlist], True))[0]

    async def _expand(
        self, playlists: list[Playlist], expand: bool
    ) -> list[PlaylistWithTracks]:
        if not expand:
            return [PlaylistWithTracks(playlist=playlist) for playlist in playlists]
        wanted = [tid for playlist in playlists for tid in playlist.tracks]
        found = {t.id: t for t in await self._tracks.find_by_ids(wanted)}
        return [
            PlaylistWithTracks(
                playlist=playlist,
                tracks=[found[tid] for tid in playlist.tracks if tid in found],
            )
            for playlist in playlists
        ]

    @staticmethod
    def _writable(fields: Mapping[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}
