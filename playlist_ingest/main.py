from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

from .catalog import DEFAULT_SAMPLES_DIR, SampleCatalog
from .ingest import PlaylistService, describe_error
from .models import Channel, Playlist
from .parser import PlaylistFormatError
from .utils.http_client import DEFAULT_USER_AGENT, FetchError, HttpClient

load_dotenv()

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INVALID_PLAYLIST = 2
EXIT_FETCH_FAILED = 3


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse extended M3U playlists into channel lists.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", default=_env_str("PLAYLIST_URL"), help="Playlist locator (http(s) URL, file:// URL or path)")
    source.add_argument("--file", default=_env_str("PLAYLIST_FILE"), help="Local playlist file to parse")
    source.add_argument("--sample", default=_env_str("PLAYLIST_SAMPLE"), help="Name of a playlist in the samples directory")
    parser.add_argument("--list-samples", action="store_true", default=_env_bool("LIST_SAMPLES"), help="List sample playlists and exit")
    parser.add_argument("--samples-dir", default=_env_str("SAMPLES_DIR") or DEFAULT_SAMPLES_DIR, help="Directory holding sample playlists")
    parser.add_argument("--group", default=_env_str("GROUP"), help="Only show channels from this group")
    parser.add_argument("--search", default=_env_str("SEARCH"), help="Only show channels whose name contains this term")
    parser.add_argument("--json", action="store_true", default=_env_bool("JSON_OUTPUT"), help="Print channels as JSON on stdout")
    parser.add_argument("--timeout", type=int, default=_env_int("FETCH_TIMEOUT") or 10, help="Download timeout in seconds")
    parser.add_argument("--user-agent", default=_env_str("USER_AGENT") or DEFAULT_USER_AGENT, help="User-Agent header for downloads")
    parser.add_argument("--log-level", default=_env_str("LOG_LEVEL") or "INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def print_samples(samples: list[str]) -> None:
    if not samples:
        logging.info("No sample playlists available.")
        return
    for name in samples:
        logging.info("  %s", name)


def print_channels(channels: list[Channel]) -> None:
    if not channels:
        logging.info("No channels found.")
        return
    logging.info("%-30s | %-20s | %s", "Name", "Group", "URL")
    logging.info("%s", "-" * 90)
    for channel in channels:
        logging.info("%-30s | %-20s | %s", channel.name, channel.group or "-", channel.url)


def select_channels(args: argparse.Namespace, playlist: Playlist) -> list[Channel]:
    return [
        channel
        for channel in playlist.channels
        if channel.is_in_group(args.group) and channel.name_contains(args.search)
    ]


def load_playlist(args: argparse.Namespace, service: PlaylistService) -> Playlist:
    if args.sample:
        return service.load_sample(args.sample)
    if args.file:
        return service.parse_file(args.file)
    return service.fetch_playlist(args.url)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    with HttpClient(timeout=args.timeout, user_agent=args.user_agent) as http_client:
        service = PlaylistService(http_client, SampleCatalog(args.samples_dir))

        if args.list_samples:
            samples = service.list_samples()
            if args.json:
                print(json.dumps(samples, ensure_ascii=False, indent=2))
            else:
                print_samples(samples)
            return EXIT_OK

        if not (args.url or args.file or args.sample):
            logging.error("One of --url, --file or --sample is required unless --list-samples is specified")
            return EXIT_USAGE

        try:
            playlist = load_playlist(args, service)
        except KeyError as exc:
            logging.error("%s", exc.args[0] if exc.args else exc)
            return EXIT_USAGE
        except PlaylistFormatError as exc:
            logging.error("%s", describe_error(exc))
            return EXIT_INVALID_PLAYLIST
        except FetchError as exc:
            logging.error("%s", describe_error(exc))
            return EXIT_FETCH_FAILED

    channels = select_channels(args, playlist)
    logging.info("Playlist %s: %s channels (%s shown)", playlist.name, playlist.channel_count(), len(channels))
    if args.json:
        payload = [channel.model_dump() for channel in channels]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print_channels(channels)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
