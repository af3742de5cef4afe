"""Track endpoints."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from orbitcms.api.dependencies import get_track_service, require_principal
from orbitcms.api.schemas.common import dump, envelope
from orbitcms.api.schemas.media import TrackIn, TrackOut, TrackSummaryOut
from orbitcms.application.services import TrackService
from orbitcms.infrastructure.security import Principal

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_tracks(
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Page size (max 100)"),
    category: str | None = Query(None, description="Exact category"),
    author: str | None = Query(None, description="Exact author"),
    search: str | None = Query(None, description="Substring of title/description/author/category"),
    expand: bool = Query(True, description="Resolve playlist ids into documents"),
    service: TrackService = Depends(get_track_service),
) -> dict[str, Any]:
    """List tracks, newest first."""
    result = await service.list_tracks(
        {"category": category, "author": author, "search": search}, page, limit, expand
    )
    return envelope(
        {
            "tracks": [dump(TrackOut.from_view(view)) for view in result.items],
            "pagination": result.pagination.to_dict(),
        }
    )


@router.get("/{track_id}")
async def get_track(
    track_id: UUID,
    expand: bool = Query(True, description="Resolve playlist ids into documents"),
    service: TrackService = Depends(get_track_service),
) -> dict[str, Any]:
    view = await service.get(str(track_id), expand=expand)
    return envelope(dump(TrackOut.from_view(view)))


# Hey future me, the track is persisted BEFORE the playlist link is attempted. If the
# link fails (bad playlistId, store hiccup) the response is still 201: the sync logs
# the failure and the track keeps its playlistId reference.
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_track(
    body: TrackIn,
    _principal: Principal = Depends(require_principal),
    service: TrackService = Depends(get_track_service),
) -> dict[str, Any]:
    track = await service.create(
        body.model_dump(exclude={"playlist_id"}), playlist_id=body.playlist_id
    )
    return envelope(dump(TrackSummaryOut.from_entity(track)), "Track created successfully")


@router.put("/{track_id}")
async def update_track(
    track_id: UUID,
    body: TrackIn,
    _principal: Principal = Depends(require_principal),
    service: TrackService = Depends(get_track_service),
) -> dict[str, Any]:
    """Partial update; a supplied playlistId (even null) moves the track."""
    track = await service.update(
        str(track_id),
        body.model_dump(exclude_unset=True, exclude={"playlist_id"}),
        reassign="playlist_id" in body.model_fields_set,
        playlist_id=body.playlist_id,
    )
    return envelope(dump(TrackSummaryOut.from_entity(track)), "Track updated successfully")


@router.delete("/{track_id}")
async def delete_track(
    track_id: UUID,
    _principal: Principal = Depends(require_principal),
    service: TrackService = Depends(get_track_service),
) -> dict[str, Any]:
    track = await service.delete(str(track_id))
    return envelope({"id": track.id, "title": track.title}, "Track deleted successfully")
