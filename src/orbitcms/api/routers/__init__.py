"""API router initialization."""

# Hey future me, this aggregates every sub-router; main.py mounts it under settings.api_prefix
# (default /api). Contacts define their own paths (/contact and /contacts) so no prefix here.

from fastapi import APIRouter

from orbitcms.api.routers import contacts, pages, playlists, tracks

api_router = APIRouter()

api_router.include_router(pages.router, prefix="/pages", tags=["Pages"])
api_router.include_router(tracks.router, prefix="/tracks", tags=["Tracks"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["Playlists"])
api_router.include_router(contacts.router, tags=["Contacts"])

__all__ = ["api_router", "contacts", "pages", "playlists", "tracks"]
