"""Application services."""

from .contact_service import ContactService
from .page_service import PageService
from .playlist_service import PlaylistService
from .query_builder import (
    CONTACT_LISTING,
    PAGE_LISTING,
    PLAYLIST_LISTING,
    TRACK_LISTING,
    ListingConfig,
    QueryBuilder,
)
from .relationship_sync import RelationshipSync
from .track_service import TrackService

__all__ = [
    "CONTACT_LISTING",
    "ContactService",
    "ListingConfig",
    "PAGE_LISTING",
    "PLAYLIST_LISTING",
    "PageService",
    "PlaylistService",
    "QueryBuilder",
    "RelationshipSync",
    "TRACK_LISTING",
    "TrackService",
]
