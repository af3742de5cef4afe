"""Dependency injection for API endpoints.

Everything hangs off app.state, populated once by the lifespan: the Database handle,
the AuthGate and the settings. Collections and services are cheap wrappers built per
request on top of those.
"""

import logging
from typing import cast

from fastapi import Depends, Header, HTTPException, Request

from orbitcms.application.services import (
    CONTACT_LISTING,
    PAGE_LISTING,
    PLAYLIST_LISTING,
    TRACK_LISTING,
    ContactService,
    ListingConfig,
    PageService,
    PlaylistService,
    QueryBuilder,
    RelationshipSync,
    TrackService,
)
from orbitcms.config import Settings
from orbitcms.infrastructure.persistence import (
    ContactCollection,
    Database,
    PageCollection,
    PlaylistCollection,
    TrackCollection,
)
from orbitcms.infrastructure.security import JWTAuthGate, Principal

logger = logging.getLogger(__name__)


def get_settings_from_app(request: Request) -> Settings:
    return cast(Settings, request.app.state.settings)


# Hey future me, if db isn't on app.state the lifespan never ran (or failed) - answer 503
# instead of an AttributeError turning into a 500.
def get_database(request: Request) -> Database:
    """Get the Database handle from app state.

    Raises:
        HTTPException: 503 if the database was not initialized
    """
    if not hasattr(request.app.state, "db"):
        raise HTTPException(status_code=503, detail="Database not initialized")
    return cast(Database, request.app.state.db)


def get_auth_gate(request: Request) -> JWTAuthGate:
    if not hasattr(request.app.state, "auth_gate"):
        raise HTTPException(status_code=503, detail="Auth not initialized")
    return cast(JWTAuthGate, request.app.state.auth_gate)


# --- authentication ---------------------------------------------------------------


async def require_principal(
    authorization: str | None = Header(None),
    auth_gate: JWTAuthGate = Depends(get_auth_gate),
) -> Principal:
    """Resolve the bearer credential; AuthenticationError becomes a 401."""
    return auth_gate.authenticate(authorization)


async def require_admin(
    principal: Principal = Depends(require_principal),
    auth_gate: JWTAuthGate = Depends(get_auth_gate),
) -> Principal:
    """Require the admin role; AuthorizationError becomes a 403."""
    return auth_gate.require_admin(principal)


# --- collections ------------------------------------------------------------------


def get_track_collection(db: Database = Depends(get_database)) -> TrackCollection:
    return TrackCollection(db)


def get_playlist_collection(db: Database = Depends(get_database)) -> PlaylistCollection:
    return PlaylistCollection(db)


def get_page_collection(db: Database = Depends(get_database)) -> PageCollection:
    return PageCollection(db)


def get_contact_collection(db: Database = Depends(get_database)) -> ContactCollection:
    return ContactCollection(db)


# --- services ---------------------------------------------------------------------


def _query_builder(config: ListingConfig, settings: Settings) -> QueryBuilder:
    return QueryBuilder(
        config,
        default_limit=settings.pagination.default_limit,
        max_limit=settings.pagination.max_limit,
    )


def get_relationship_sync(
    tracks: TrackCollection = Depends(get_track_collection),
    playlists: PlaylistCollection = Depends(get_playlist_collection),
) -> RelationshipSync:
    return RelationshipSync(tracks, playlists)


def get_track_service(
    tracks: TrackCollection = Depends(get_track_collection),
    playlists: PlaylistCollection = Depends(get_playlist_collection),
    sync: RelationshipSync = Depends(get_relationship_sync),
    settings: Settings = Depends(get_settings_from_app),
) -> TrackService:
    return TrackService(tracks, playlists, sync, _query_builder(TRACK_LISTING, settings))


def get_playlist_service(
    playlists: PlaylistCollection = Depends(get_playlist_collection),
    tracks: TrackCollection = Depends(get_track_collection),
    settings: Settings = Depends(get_settings_from_app),
) -> PlaylistService:
    return PlaylistService(playlists, tracks, _query_builder(PLAYLIST_LISTING, settings))


def get_page_service(
    pages: PageCollection = Depends(get_page_collection),
    settings: Settings = Depends(get_settings_from_app),
) -> PageService:
    return PageService(pages, _query_builder(PAGE_LISTING, settings))


def get_contact_service(
    contacts: ContactCollection = Depends(get_contact_collection),
    settings: Settings = Depends(get_settings_from_app),
) -> ContactService:
    return ContactService(contacts, _query_builder(CONTACT_LISTING, settings))
