"""Utility helpers for fetching content and locating playlist files."""

from .http_client import FetchError, HttpClient
from .file_utils import is_playlist_file, list_playlist_files

__all__ = ["FetchError", "HttpClient", "is_playlist_file", "list_playlist_files"]
