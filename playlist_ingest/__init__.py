"""Extended M3U playlist ingestion."""

from .ingest import PlaylistService, describe_error
from .models import Channel, Playlist
from .parser import InvalidHeaderError, PlaylistFormatError, parse_m3u, parse_playlist
from .utils import FetchError, HttpClient

__all__ = [
    "Channel",
    "FetchError",
    "HttpClient",
    "InvalidHeaderError",
    "Playlist",
    "PlaylistFormatError",
    "PlaylistService",
    "describe_error",
    "parse_m3u",
    "parse_playlist",
]
