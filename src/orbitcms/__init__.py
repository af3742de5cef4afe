"""orbitcms - content-management backend for pages, tracks, playlists and contacts."""

__version__ = "0.1.0"
