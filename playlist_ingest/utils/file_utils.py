"""Filesystem helpers for locating playlist files."""

from __future__ import annotations

import os
from typing import List

PLAYLIST_EXTENSIONS = (".m3u", ".m3u8")


def is_playlist_file(filename: str) -> bool:
    """True when ``filename`` carries a playlist extension (case-insensitive)."""

    return filename.lower().endswith(PLAYLIST_EXTENSIONS)


def list_playlist_files(directory: str) -> List[str]:
    """Returns sorted playlist file names directly inside ``directory``.

    Raises ``OSError`` if the directory cannot be listed.
    """

    names = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_file() and is_playlist_file(entry.name):
                names.append(entry.name)
    return sorted(names)
