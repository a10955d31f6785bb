"""Catalog of playlist files shipped in a local samples directory."""

from __future__ import annotations

import logging
import os
from typing import List

from ..utils.file_utils import list_playlist_files

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
DEFAULT_SAMPLES_DIR = os.path.join(PROJECT_ROOT, "samples")


class SampleCatalog:
    """Lists and resolves the sample playlists found in one directory."""

    def __init__(self, directory: str = DEFAULT_SAMPLES_DIR) -> None:
        self.directory = directory

    def list_available(self) -> List[str]:
        if not os.path.isdir(self.directory):
            logging.debug("Samples directory %s does not exist", self.directory)
            return []
        try:
            return list_playlist_files(self.directory)
        except OSError as exc:
            logging.warning("Unable to list samples in %s: %s", self.directory, exc)
            return []

    def resolve(self, identifier: str) -> str:
        """Returns the path of a listed sample, or raises ``KeyError``."""

        if identifier not in self.list_available():
            raise KeyError(f"Unknown sample playlist: {identifier}")
        return os.path.join(self.directory, identifier)
