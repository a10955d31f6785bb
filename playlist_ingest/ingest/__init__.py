"""Playlist ingestion service used by callers."""

from .playlist_service import PlaylistService, describe_error

__all__ = ["PlaylistService", "describe_error"]
