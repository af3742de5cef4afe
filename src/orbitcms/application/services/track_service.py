"""Track service: CRUD plus playlist linking through RelationshipSync."""

import logging
from collections.abc import Mapping
from typing import Any

from orbitcms.application.services.query_builder import QueryBuilder
from orbitcms.application.services.relationship_sync import RelationshipSync
from orbitcms.domain.dtos import Paginated, SyncResult, TrackWithPlaylists
from orbitcms.domain.entities import Playlist, Track
from orbitcms.domain.exceptions import EntityNotFoundException
from orbitcms.domain.ports import IDocumentCollection, UpdateSpec

logger = logging.getLogger(__name__)

# Fields a client may write; playlists only change through the sync
WRITABLE_FIELDS = frozenset(
    {
        "title",
        "author",
        "description",
        "duration",
        "listeners",
        "date",
        "thumbnail",
        "category",
        "trending",
        "audio_url",
    }
)


class TrackService:
    """Service for track management operations."""

    def __init__(
        self,
        tracks: IDocumentCollection[Track],
        playlists: IDocumentCollection[Playlist],
        sync: RelationshipSync,
        query_builder: QueryBuilder,
    ) -> None:
        self._tracks = tracks
        self._playlists = playlists
        self._sync = sync
        self._query_builder = query_builder

    async def create(
        self, fields: Mapping[str, Any], playlist_id: str | None = None
    ) -> Track:
        """Persist a track, then link it to `playlist_id` if given.

        The track exists before any playlist side effect is attempted; a failed link
        is logged by the sync and the created track is still returned.
        """
        track = await self._tracks.insert(Track(**self._writable(fields)))
        logger.info("Track created", extra={"track_id": track.id})
        result = await self._sync.on_track_created(track, playlist_id)
        self._report_partial_link(result)
        return result.track

    async def get(self, track_id: str, expand: bool = True) -> TrackWithPlaylists:
        track = await self._tracks.find_by_id(track_id)
        if track is None:
            raise EntityNotFoundException("Track", track_id)
        return (await self._expand([track], expand))[0]

    async def list_tracks(
        self,
        params: Mapping[str, Any],
        page: int | None = None,
        limit: int | None = None,
        expand: bool = True,
    ) -> Paginated[TrackWithPlaylists]:
        result = await self._query_builder.paginate(self._tracks, params, page, limit)
        return Paginated(
            items=await self._expand(result.items, expand),
            pagination=result.pagination,
        )

    async def update(
        self,
        track_id: str,
        fields: Mapping[str, Any],
        *,
        reassign: bool = False,
        playlist_id: str | None = None,
    ) -> Track:
        """Apply a partial update.

        Args:
            track_id: Track to update
            fields: Entity fields to overwrite (only those supplied by the client)
            reassign: True when the client sent playlistId at all, even as null
            playlist_id: New playlist, or None to detach from every playlist
        """
        current = await self._tracks.find_by_id(track_id)
        if current is None:
            raise EntityNotFoundException("Track", track_id)

        track = await self._tracks.update_by_id(
            track_id, UpdateSpec(set=self._writable(fields))
        )
        if track is None:
            raise EntityNotFoundException("Track", track_id)

        if reassign:
            result = await self._sync.on_track_playlist_changed(
                track, current.playlists, playlist_id
            )
            self._report_partial_link(result)
            track = result.track
        return track

    async def delete(self, track_id: str) -> Track:
        """Delete a track without touching the playlists that reference it."""
        track = await self._tracks.delete_by_id(track_id)
        if track is None:
            raise EntityNotFoundException("Track", track_id)
        if track.playlists:
            # Not cascaded: those playlists keep a stale id until edited
            logger.warning(
                "Deleted track is still referenced by playlists",
                extra={"track_id": track.id, "playlist_ids": track.playlists},
            )
        return track

    async def _expand(
        self, tracks: list[Track], expand: bool
    ) -> list[TrackWithPlaylists]:
        if not expand:
            return [TrackWithPlaylists(track=track) for track in tracks]
        wanted = [pid for track in tracks for pid in track.playlists]
        found = {p.id: p for p in await self._playlists.find_by_ids(wanted)}
        return [
            TrackWithPlaylists(
                track=track,
                playlists=[found[pid] for pid in track.playlists if pid in found],
            )
            for track in tracks
        ]

    @staticmethod
    def _report_partial_link(result: SyncResult) -> None:
        if not result.succeeded:
            logger.warning(
                "Track saved but its playlist link is incomplete",
                extra={"track_id": result.track.id, "failed_steps": result.failures},
            )

    @staticmethod
    def _writable(fields: Mapping[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}


__all__ = ["TrackService"]
