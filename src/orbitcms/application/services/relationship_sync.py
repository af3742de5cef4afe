"""Keep Track.playlists and Playlist.tracks pointing at each other.

There is no cross-document transaction: every step below is one atomic, idempotent
document update (set-add or pull). A failing step is logged and skipped, the rest still
run, and the primary track write that triggered the sync is never rolled back.
Playlist.track_count is not touched here; the store recomputes it from the array on
every playlist write.
"""

import logging
from collections.abc import Sequence

from orbitcms.domain.dtos import SyncResult
from orbitcms.domain.entities import Playlist, Track
from orbitcms.domain.ports import IDocumentCollection, UpdateSpec
from orbitcms.infrastructure.observability.logger_template import log_operation

logger = logging.getLogger(__name__)

STEP_PLAYLIST_ADD = "playlist_add"
STEP_PLAYLIST_REMOVE = "playlist_remove"
STEP_TRACK_LINK = "track_link"


class RelationshipSync:
    """Best-effort saga over the two sides of the track/playlist link."""

    def __init__(
        self,
        tracks: IDocumentCollection[Track],
        playlists: IDocumentCollection[Playlist],
    ) -> None:
        self._tracks = tracks
        self._playlists = playlists

    async def on_track_created(self, track: Track, playlist_id: str | None) -> SyncResult:
        """Attach a freshly persisted track to its playlist.

        The track keeps `playlists=[playlist_id]` even when the playlist side fails
        (e.g. the playlist doesn't exist); that dangling reference is logged, not fixed.
        """
        if not playlist_id:
            return SyncResult(track=track)

        failures: list[str] = []
        async with log_operation(
            logger, "track.link", track_id=track.id, playlist_id=playlist_id
        ):
            if not await self._add_to_playlist(track.id, playlist_id):
                failures.append(STEP_PLAYLIST_ADD)
            linked = await self._set_track_playlists(track, [playlist_id])
            if linked is None:
                failures.append(STEP_TRACK_LINK)

        return SyncResult(track=linked or track, failures=failures)

    async def on_track_playlist_changed(
        self,
        track: Track,
        previous_playlists: Sequence[str],
        playlist_id: str | None,
    ) -> SyncResult:
        """Move a track from its previous playlists to `playlist_id` (or to none).

        Each playlist update is independent. Re-assigning the playlist a track is
        already in keeps its position, since the set-add is a no-op there.
        """
        failures: list[str] = []
        async with log_operation(
            logger,
            "track.reassign",
            track_id=track.id,
            previous_playlists=list(previous_playlists),
            playlist_id=playlist_id,
        ):
            for old_id in dict.fromkeys(previous_playlists):
                if old_id == playlist_id:
                    continue
                if not await self._remove_from_playlist(track.id, old_id):
                    failures.append(STEP_PLAYLIST_REMOVE)

            if playlist_id and not await self._add_to_playlist(track.id, playlist_id):
                failures.append(STEP_PLAYLIST_ADD)

            linked = await self._set_track_playlists(track, [playlist_id] if playlist_id else [])
            if linked is None:
                failures.append(STEP_TRACK_LINK)

        return SyncResult(track=linked or track, failures=failures)

    # --- steps -----------------------------------------------------------------
    # Hey future me - every step returns a truthy/falsy outcome instead of raising. Catching
    # Exception here is the whole point: one bad playlist must not abort the others or
    # the request that triggered the sync.

    async def _add_to_playlist(self, track_id: str, playlist_id: str) -> bool:
        try:
            updated = await self._playlists.update_by_id(
                playlist_id, UpdateSpec(add_to_set={"tracks": [track_id]})
            )
        except Exception:
            self._log_failure(STEP_PLAYLIST_ADD, track_id, playlist_id)
            return False
        if updated is None:
            logger.warning(
                "Playlist not found while linking track",
                extra={"track_id": track_id, "playlist_id": playlist_id, "step": STEP_PLAYLIST_ADD},
            )
            return False
        return True

    async def _remove_from_playlist(self, track_id: str, playlist_id: str) -> bool:
        try:
            updated = await self._playlists.update_by_id(
                playlist_id, UpdateSpec(pull={"tracks": [track_id]})
            )
        except Exception:
            self._log_failure(STEP_PLAYLIST_REMOVE, track_id, playlist_id)
            return False
        if updated is None:
            logger.warning(
                "Previous playlist not found while unlinking track",
                extra={
                    "track_id": track_id,
                    "playlist_id": playlist_id,
                    "step": STEP_PLAYLIST_REMOVE,
                },
            )
            return False
        return True

    async def _set_track_playlists(self, track: Track, playlist_ids: list[str]) -> Track | None:
        try:
            updated = await self._tracks.update_by_id(
                track.id, UpdateSpec(set={"playlists": playlist_ids})
            )
        except Exception:
            self._log_failure(STEP_TRACK_LINK, track.id, playlist_ids[0] if playlist_ids else None)
            return None
        if updated is None:
            # Track deleted by a concurrent request between the primary write and here
            logger.warning(
                "Track vanished before its playlist link was written",
                extra={"track_id": track.id, "step": STEP_TRACK_LINK},
            )
        return updated

    @staticmethod
    def _log_failure(step: str, track_id: str, playlist_id: str | None) -> None:
        logger.error(
            f"Relationship sync step {step} failed",
            extra={"track_id": track_id, "playlist_id": playlist_id, "step": step},
            exc_info=True,
        )
