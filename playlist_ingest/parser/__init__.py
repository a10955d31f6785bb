"""Extended M3U parsing."""

from .m3u_parser import (
    ExtinfInfo,
    InvalidHeaderError,
    M3UParser,
    PlaylistFormatError,
    parse_extinf,
    parse_m3u,
    parse_playlist,
)

__all__ = [
    "ExtinfInfo",
    "InvalidHeaderError",
    "M3UParser",
    "PlaylistFormatError",
    "parse_extinf",
    "parse_m3u",
    "parse_playlist",
]
