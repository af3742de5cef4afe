"""Persistence layer: engine, ORM models and document collections."""

from .collections import (
    ContactCollection,
    PageCollection,
    PlaylistCollection,
    SqlDocumentCollection,
    TrackCollection,
)
from .database import Database

__all__ = [
    "ContactCollection",
    "Database",
    "PageCollection",
    "PlaylistCollection",
    "SqlDocumentCollection",
    "TrackCollection",
]
