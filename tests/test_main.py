from __future__ import annotations

import json
from pathlib import Path

import pytest

from playlist_ingest import main as cli
from playlist_ingest.utils.http_client import FetchError, HttpClient

PLAYLIST = """#EXTM3U
#EXTINF:-1 group-title="News",News One
http://stream/news-one
#EXTINF:-1 group-title="Sports",Sport HD
http://stream/sport
"""


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PLAYLIST_URL", "PLAYLIST_FILE", "PLAYLIST_SAMPLE", "GROUP", "SEARCH", "JSON_OUTPUT", "LIST_SAMPLES"):
        monkeypatch.delenv(name, raising=False)


def test_parse_file_as_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "list.m3u"
    path.write_text(PLAYLIST, encoding="utf-8")

    assert cli.main(["--file", str(path), "--json", "--group", "sports"]) == cli.EXIT_OK

    payload = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in payload] == ["Sport HD"]
    assert payload[0]["url"] == "http://stream/sport"


def test_list_samples_as_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "one.m3u").write_text(PLAYLIST, encoding="utf-8")

    assert cli.main(["--list-samples", "--samples-dir", str(tmp_path), "--json"]) == cli.EXIT_OK

    assert json.loads(capsys.readouterr().out) == ["one.m3u"]


def test_sample_by_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "one.m3u").write_text(PLAYLIST, encoding="utf-8")

    code = cli.main(["--sample", "one.m3u", "--samples-dir", str(tmp_path), "--json", "--search", "news"])

    assert code == cli.EXIT_OK
    assert [item["name"] for item in json.loads(capsys.readouterr().out)] == ["News One"]


def test_unknown_sample_is_usage_error(tmp_path: Path) -> None:
    assert cli.main(["--sample", "nope.m3u", "--samples-dir", str(tmp_path)]) == cli.EXIT_USAGE


def test_missing_source_is_usage_error() -> None:
    assert cli.main([]) == cli.EXIT_USAGE


def test_invalid_playlist_exit_code(tmp_path: Path) -> None:
    path = tmp_path / "bad.m3u"
    path.write_text("#EXTINF:-1,A\nhttp://a\n", encoding="utf-8")

    assert cli.main(["--file", str(path)]) == cli.EXIT_INVALID_PLAYLIST


def test_fetch_failure_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(self, locator):
        raise FetchError(locator, "connection refused")

    monkeypatch.setattr(HttpClient, "fetch_text", fail)

    assert cli.main(["--url", "http://example.org/list.m3u"]) == cli.EXIT_FETCH_FAILED


def test_remote_url_table_output(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(HttpClient, "fetch_text", lambda self, locator: PLAYLIST)

    with caplog.at_level("INFO"):
        assert cli.main(["--url", "http://example.org/list.m3u"]) == cli.EXIT_OK

    assert "Sport HD" in caplog.text
    assert "2 channels" in caplog.text
