"""Playlist endpoints."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from orbitcms.api.dependencies import get_playlist_service, require_principal
from orbitcms.api.schemas.common import dump, envelope
from orbitcms.api.schemas.media import AddTracksIn, PlaylistIn, PlaylistOut
from orbitcms.application.services import PlaylistService
from orbitcms.infrastructure.security import Principal

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def list_playlists(
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Page size (max 100)"),
    created_by: str | None = Query(None, alias="createdBy", description="Exact creator"),
    is_public: bool | None = Query(None, alias="isPublic", description="Visibility"),
    tag: str | None = Query(None, description="Playlists carrying this tag"),
    search: str | None = Query(None, description="Substring of title/description/createdBy"),
    expand: bool = Query(True, description="Resolve track ids into documents"),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    """List playlists, newest first."""
    result = await service.list_playlists(
        {"createdBy": created_by, "isPublic": is_public, "tag": tag, "search": search},
        page,
        limit,
        expand,
    )
    return envelope(
        {
            "playlists": [dump(PlaylistOut.from_view(view)) for view in result.items],
            "pagination": result.pagination.to_dict(),
        }
    )


@router.get("/{playlist_id}")
async def get_playlist(
    playlist_id: UUID,
    expand: bool = Query(True, description="Resolve track ids into documents"),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    view = await service.get(str(playlist_id), expand=expand)
    return envelope(dump(PlaylistOut.from_view(view)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_playlist(
    body: PlaylistIn,
    _principal: Principal = Depends(require_principal),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    view = await service.create(body.model_dump())
    return envelope(dump(PlaylistOut.from_view(view)), "Playlist created successfully")


@router.put("/{playlist_id}")
async def update_playlist(
    playlist_id: UUID,
    body: PlaylistIn,
    _principal: Principal = Depends(require_principal),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    view = await service.update(str(playlist_id), body.model_dump(exclude_unset=True))
    return envelope(dump(PlaylistOut.from_view(view)), "Playlist updated successfully")


@router.delete("/{playlist_id}")
async def delete_playlist(
    playlist_id: UUID,
    _principal: Principal = Depends(require_principal),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    playlist = await service.delete(str(playlist_id))
    return envelope(
        {"id": playlist.id, "title": playlist.title}, "Playlist deleted successfully"
    )


# Yo, bulk add is set-semantics: ids already in the playlist are skipped, so replaying the
# same request never grows trackCount. Tracks' own `playlists` field is NOT touched here.
@router.put("/{playlist_id}/tracks")
async def add_tracks(
    playlist_id: UUID,
    body: AddTracksIn,
    _principal: Principal = Depends(require_principal),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    view = await service.add_tracks(str(playlist_id), body.track_ids)
    return envelope(
        dump(PlaylistOut.from_view(view)), "Tracks added to playlist successfully"
    )


@router.delete("/{playlist_id}/tracks/{track_id}")
async def remove_track(
    playlist_id: UUID,
    track_id: UUID,
    _principal: Principal = Depends(require_principal),
    service: PlaylistService = Depends(get_playlist_service),
) -> dict[str, Any]:
    view = await service.remove_track(str(playlist_id), str(track_id))
    return envelope(
        dump(PlaylistOut.from_view(view)), "Track removed from playlist successfully"
    )
