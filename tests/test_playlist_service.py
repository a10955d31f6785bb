from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from playlist_ingest.catalog import SampleCatalog
from playlist_ingest.ingest import PlaylistService, describe_error
from playlist_ingest.parser import InvalidHeaderError
from playlist_ingest.utils.http_client import FetchError

VALID = """#EXTM3U
#EXTINF:-1 tvg-logo="http://x/l.png" group-title="News",Channel A
http://stream/a.m3u8
"""


class FakeHttpClient:
    """Serves canned content per locator and records every fetch."""

    def __init__(self, responses: dict[str, str]) -> None:
        self.responses = responses
        self.calls: list[str] = []

    def fetch_text(self, locator: str) -> str:
        self.calls.append(locator)
        if locator not in self.responses:
            raise FetchError(locator, "404 Not Found")
        return self.responses[locator]

    async def fetch_text_async(self, locator: str) -> str:
        return self.fetch_text(locator)


def _service(client: FakeHttpClient, samples_dir: Path) -> PlaylistService:
    return PlaylistService(client, SampleCatalog(str(samples_dir)))


def test_fetch_and_parse_fetches_exactly_once(tmp_path: Path) -> None:
    client = FakeHttpClient({"http://lists/a.m3u": VALID})

    channels = _service(client, tmp_path).fetch_and_parse("http://lists/a.m3u")

    assert [(c.name, c.url, c.logo, c.group) for c in channels] == [
        ("Channel A", "http://stream/a.m3u8", "http://x/l.png", "News")
    ]
    assert client.calls == ["http://lists/a.m3u"]


def test_fetch_failure_and_format_failure_are_distinct(tmp_path: Path) -> None:
    client = FakeHttpClient({"http://lists/html": "<html>nope</html>"})
    service = _service(client, tmp_path)

    with pytest.raises(FetchError) as fetch_exc:
        service.fetch_and_parse("http://lists/missing")
    with pytest.raises(InvalidHeaderError) as format_exc:
        service.fetch_and_parse("http://lists/html")

    assert not isinstance(fetch_exc.value, InvalidHeaderError)
    assert describe_error(fetch_exc.value).startswith("Could not retrieve playlist")
    assert describe_error(format_exc.value).startswith("Not a valid M3U playlist")
    assert client.calls == ["http://lists/missing", "http://lists/html"]


def test_empty_playlist_is_not_an_error(tmp_path: Path) -> None:
    client = FakeHttpClient({"http://lists/empty": "#EXTM3U\n"})

    assert _service(client, tmp_path).fetch_and_parse("http://lists/empty") == []


def test_fetch_and_parse_async(tmp_path: Path) -> None:
    client = FakeHttpClient({"http://lists/a.m3u": VALID})

    channels = asyncio.run(_service(client, tmp_path).fetch_and_parse_async("http://lists/a.m3u"))

    assert [c.name for c in channels] == ["Channel A"]


def test_fetch_playlist_keeps_source(tmp_path: Path) -> None:
    client = FakeHttpClient({"http://lists/a.m3u": VALID})

    playlist = _service(client, tmp_path).fetch_playlist("http://lists/a.m3u")

    assert playlist.source == "http://lists/a.m3u"
    assert playlist.channel_count() == 1


def test_list_and_load_samples(tmp_path: Path) -> None:
    sample = tmp_path / "demo.m3u"
    sample.write_text(VALID, encoding="utf-8")
    client = FakeHttpClient({str(sample): VALID})
    service = _service(client, tmp_path)

    assert service.list_samples() == ["demo.m3u"]
    playlist = service.load_sample("demo.m3u")
    assert playlist.source == str(sample)
    assert [c.name for c in playlist.channels] == ["Channel A"]

    with pytest.raises(KeyError):
        service.load_sample("other.m3u")


def test_list_samples_without_directory(tmp_path: Path) -> None:
    service = _service(FakeHttpClient({}), tmp_path / "missing")

    assert service.list_samples() == []


def test_parse_file_rejects_non_playlist(tmp_path: Path) -> None:
    path = str(tmp_path / "notes.m3u")
    service = _service(FakeHttpClient({path: "just some notes\n"}), tmp_path)

    with pytest.raises(InvalidHeaderError):
        service.parse_file(path)
