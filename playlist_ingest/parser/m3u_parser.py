"""Line-oriented parser turning extended M3U text into channel records."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

from ..models import DEFAULT_PLAYLIST_NAME, Channel, Playlist
from ..models.channel_models import looks_like_vod, new_channel_id
from ..utils.http_client import HttpClient

HEADER_MARKER = "#EXTM3U"
DIRECTIVE_PREFIX = "#EXTINF:"
COMMENT_PREFIX = "#"

# Duration, optional attribute segment, then the name after the last comma
# that sits outside a quoted value.
EXTINF_RE = re.compile(
    r'^#EXTINF:\s*(?P<duration>[-+]?\d+(?:\.\d+)?)'
    r'(?P<attrs>(?:\s(?:[^"]|"[^"]*")*)?)'
    r',(?P<name>.*)$'
)
# Fallback for unbalanced quotes: split on the last comma of the line.
EXTINF_LOOSE_RE = re.compile(
    r'^#EXTINF:\s*(?P<duration>[-+]?\d+(?:\.\d+)?)(?P<attrs>(?:\s.*)?),(?P<name>.*)$'
)
ATTR_RE = re.compile(r'([A-Za-z0-9_\-]+)="([^"]*)"')

# Attribute key -> Channel field, evaluated independently of their order on the line.
KNOWN_ATTRIBUTES: Tuple[Tuple[str, str], ...] = (
    ("tvg-logo", "logo"),
    ("group-title", "group"),
    ("tvg-id", "tvg_id"),
    ("tvg-name", "tvg_name"),
    ("tvg-language", "language"),
)


class PlaylistFormatError(ValueError):
    """Base class for content that is not a usable M3U playlist."""


class InvalidHeaderError(PlaylistFormatError):
    """Raised when the first line does not carry the #EXTM3U marker."""

    def __init__(self, message: str = f"Invalid M3U format: first line does not contain {HEADER_MARKER}") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ExtinfInfo:
    matched: bool
    name: str = ""
    duration: Optional[float] = None
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class _PendingEntry:
    info: ExtinfInfo
    id: str = field(default_factory=new_channel_id)


def extract_attributes(segment: str) -> Dict[str, str]:
    """Collects quoted ``key="value"`` pairs; the first occurrence of a key wins."""

    attributes: Dict[str, str] = {}
    for key, value in ATTR_RE.findall(segment):
        attributes.setdefault(key, value)
    return attributes


def parse_extinf(line: str) -> ExtinfInfo:
    """Splits a ``#EXTINF:`` line into duration, attributes and display name."""

    match = EXTINF_RE.match(line) or EXTINF_LOOSE_RE.match(line)
    if not match:
        return ExtinfInfo(matched=False)
    return ExtinfInfo(
        matched=True,
        name=match.group("name").strip(),
        duration=float(match.group("duration")),
        attributes=extract_attributes(match.group("attrs")),
    )


def _split_lines(content: str) -> List[str]:
    return [raw_line.strip() for raw_line in content.split("\n")]


def _check_header(lines: List[str]) -> str:
    header = lines[0] if lines else ""
    if HEADER_MARKER not in header:
        raise InvalidHeaderError()
    return header


def _build_channel(entry: _PendingEntry, url: str) -> Optional[Channel]:
    info = entry.info
    if not info.name or not url:
        return None

    lowered: Dict[str, str] = {}
    for key, value in info.attributes.items():
        lowered.setdefault(key.lower(), value)
    known = {attr: lowered[key] for key, attr in KNOWN_ATTRIBUTES if key in lowered}
    return Channel(
        id=entry.id,
        name=info.name,
        url=url,
        duration=info.duration,
        attributes=dict(info.attributes),
        is_vod=looks_like_vod(url, known.get("group")),
        **known,
    )


def _scan_channels(lines: List[str]) -> List[Channel]:
    channels: List[Channel] = []
    pending: Optional[_PendingEntry] = None
    directives = 0

    for line in lines[1:]:
        if line.startswith(DIRECTIVE_PREFIX):
            directives += 1
            if pending is not None:
                logging.debug("Dropping entry without URL: %r", pending.info.name)
            pending = _PendingEntry(info=parse_extinf(line))
            continue
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        if pending is None:
            continue

        channel = _build_channel(pending, line)
        if channel is not None:
            channels.append(channel)
        else:
            logging.debug("Dropping incomplete entry for URL %s", line)
        pending = None

    if pending is not None:
        logging.debug("Dropping trailing entry without URL: %r", pending.info.name)
    logging.debug("Parsed %s channels from %s directive lines", len(channels), directives)
    return channels


def parse_m3u(content: str) -> List[Channel]:
    """Parses playlist text into channels, in the order their URL lines appear.

    Raises :class:`InvalidHeaderError` when the first line lacks ``#EXTM3U``.
    Malformed or incomplete entries are skipped without error.
    """

    lines = _split_lines(content)
    _check_header(lines)
    return _scan_channels(lines)


def playlist_name_from(attributes: Dict[str, str]) -> str:
    tvg_url = attributes.get("x-tvg-url")
    if not tvg_url:
        return DEFAULT_PLAYLIST_NAME
    stem = os.path.splitext(os.path.basename(urlparse(tvg_url).path))[0]
    return stem or DEFAULT_PLAYLIST_NAME


def parse_playlist(content: str, source: Optional[str] = None) -> Playlist:
    """Like :func:`parse_m3u` but keeps header attributes and the source."""

    lines = _split_lines(content)
    header = _check_header(lines)
    attributes = extract_attributes(header.split(HEADER_MARKER, 1)[1])
    return Playlist(
        name=playlist_name_from(attributes),
        source=source,
        attributes=attributes,
        channels=_scan_channels(lines),
    )


class M3UParser:
    """Parses M3U playlists, fetching them first when given a locator."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    def parse(self, content: str) -> List[Channel]:
        return parse_m3u(content)

    def parse_playlist(self, content: str, source: Optional[str] = None) -> Playlist:
        return parse_playlist(content, source=source)

    def fetch(self, locator: str) -> Playlist:
        text = self._http_client.fetch_text(locator)
        playlist = parse_playlist(text, source=locator)
        if not playlist.channels:
            logging.warning("Playlist at %s did not contain any channels", locator)
        return playlist
