"""Data models for parsed channels and playlists."""

from .channel_models import Channel
from .playlist_models import DEFAULT_PLAYLIST_NAME, UNGROUPED_LABEL, Playlist

__all__ = [
    "Channel",
    "Playlist",
    "DEFAULT_PLAYLIST_NAME",
    "UNGROUPED_LABEL",
]
