"""Entry points that fetch, parse and list playlists for callers."""

from __future__ import annotations

import logging
from typing import List

from ..catalog import SampleCatalog
from ..models import Channel, Playlist
from ..parser.m3u_parser import M3UParser, PlaylistFormatError, parse_m3u, parse_playlist
from ..utils.http_client import FetchError, HttpClient


def describe_error(exc: Exception) -> str:
    """Turns an ingestion failure into a message fit for an end user."""

    if isinstance(exc, PlaylistFormatError):
        return f"Not a valid M3U playlist: {exc}"
    if isinstance(exc, FetchError):
        return f"Could not retrieve playlist: {exc.reason}"
    return f"Unexpected error while reading playlist: {exc}"


class PlaylistService:
    """Routes fetch, parse and sample listing requests to their collaborators."""

    def __init__(self, http_client: HttpClient, catalog: SampleCatalog) -> None:
        self._http_client = http_client
        self._catalog = catalog
        self._parser = M3UParser(http_client)

    def fetch_and_parse(self, locator: str) -> List[Channel]:
        """Fetches ``locator`` once and parses it.

        :class:`FetchError` and :class:`InvalidHeaderError` propagate unchanged.
        """

        logging.info("Parsing M3U from %s", locator)
        text = self._http_client.fetch_text(locator)
        return self._parse_logged(text, locator)

    async def fetch_and_parse_async(self, locator: str) -> List[Channel]:
        logging.info("Parsing M3U from %s", locator)
        text = await self._http_client.fetch_text_async(locator)
        return self._parse_logged(text, locator)

    def fetch_playlist(self, locator: str) -> Playlist:
        logging.info("Parsing M3U playlist from %s", locator)
        try:
            playlist = self._parser.fetch(locator)
        except PlaylistFormatError as exc:
            logging.error("Content at %s is not a playlist: %s", locator, exc)
            raise
        logging.info("Parsed %s channels from %s", playlist.channel_count(), locator)
        return playlist

    def parse_file(self, path: str) -> Playlist:
        logging.info("Parsing M3U from file %s", path)
        text = self._http_client.fetch_text(path)
        try:
            return parse_playlist(text, source=path)
        except PlaylistFormatError as exc:
            logging.error("File %s is not a playlist: %s", path, exc)
            raise

    def load_sample(self, identifier: str) -> Playlist:
        return self.parse_file(self._catalog.resolve(identifier))

    def list_samples(self) -> List[str]:
        return self._catalog.list_available()

    def _parse_logged(self, text: str, locator: str) -> List[Channel]:
        try:
            channels = parse_m3u(text)
        except PlaylistFormatError as exc:
            logging.error("Content at %s is not a playlist: %s", locator, exc)
            raise
        logging.info("Parsed %s channels from %s", len(channels), locator)
        return channels
