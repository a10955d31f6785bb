"""Retrieves playlist text from remote locators or local files."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Dict, Optional
from urllib.parse import unquote, urlparse

import aiohttp
import requests

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

REMOTE_SCHEMES = {"http", "https"}


class FetchError(Exception):
    """Raised when playlist content cannot be retrieved."""

    def __init__(self, locator: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {locator}: {reason}")
        self.locator = locator
        self.reason = reason


def decode_playlist_bytes(payload: bytes) -> str:
    return payload.decode("utf-8-sig", errors="replace")


def is_remote_locator(locator: str) -> bool:
    return urlparse(locator).scheme.lower() in REMOTE_SCHEMES


def local_path_for(locator: str) -> str:
    """Maps a ``file://`` URL or plain path to a filesystem path."""

    parsed = urlparse(locator)
    if parsed.scheme.lower() == "file":
        return unquote(parsed.path)
    return os.path.expanduser(locator)


class HttpClient:
    """Fetches playlist content over HTTP(S) or from disk, once per call."""

    def __init__(self, timeout: int = 10, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self._headers: Dict[str, str] = {
            "user-agent": user_agent,
            "accept": "*/*",
        }
        self._session = requests.Session()
        self._session.headers.update(self._headers)

        self._async_session: Optional[aiohttp.ClientSession] = None
        self._async_lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._close_task: Optional["asyncio.Task[None]"] = None

    def fetch_text(self, locator: str) -> str:
        """Return the playlist text behind ``locator``."""

        if not is_remote_locator(locator):
            return self._read_local(locator)

        try:
            response = self._session.get(locator, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logging.error("Playlist download from %s failed: %s", locator, exc)
            raise FetchError(locator, str(exc)) from exc
        return decode_playlist_bytes(response.content)

    async def fetch_text_async(self, locator: str) -> str:
        """Asynchronous variant of :meth:`fetch_text`."""

        if not is_remote_locator(locator):
            return await asyncio.to_thread(self._read_local, locator)

        session = await self._get_async_session()
        try:
            async with session.get(locator) as resp:
                resp.raise_for_status()
                payload = await resp.read()
        except asyncio.TimeoutError as exc:
            logging.error("Playlist download from %s timed out", locator)
            raise FetchError(locator, f"timed out after {self.timeout}s") from exc
        except aiohttp.ClientError as exc:
            logging.error("Playlist download from %s failed: %s", locator, exc)
            raise FetchError(locator, str(exc)) from exc
        return decode_playlist_bytes(payload)

    def _read_local(self, locator: str) -> str:
        path = local_path_for(locator)
        try:
            with open(path, "rb") as handle:
                payload = handle.read()
        except OSError as exc:
            logging.error("Reading playlist file %s failed: %s", path, exc)
            raise FetchError(locator, str(exc)) from exc
        return decode_playlist_bytes(payload)

    async def _get_async_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._async_session:
            if (
                self._async_session.closed
                or not self._loop
                or self._loop.is_closed()
                or self._loop is not current_loop
            ):
                await self._shutdown_async_session()

        if self._async_lock is None or self._loop is not current_loop:
            self._async_lock = asyncio.Lock()

        async with self._async_lock:
            if self._async_session and not self._async_session.closed:
                return self._async_session
            self._async_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self._headers.copy(),
            )
            self._loop = current_loop
        return self._async_session

    @staticmethod
    async def _close_session(session: aiohttp.ClientSession) -> None:
        try:
            await session.close()
        except (aiohttp.ClientError, RuntimeError) as exc:
            # Connections bound to a finished loop cannot be closed cleanly.
            logging.debug("Ignoring error while closing async session: %s", exc)
            session.detach()

    async def _shutdown_async_session(self) -> None:
        session = self._async_session
        self._async_session = None
        self._loop = None
        if session and not session.closed:
            await self._close_session(session)

    async def aclose(self) -> None:
        self._session.close()
        await self._shutdown_async_session()

    def close(self) -> None:
        self._session.close()

        session = self._async_session
        self._async_session = None
        self._loop = None
        if not session or session.closed:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is None:
            asyncio.run(self._close_session(session))
        else:
            self._close_task = running.create_task(self._close_session(session))

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()
