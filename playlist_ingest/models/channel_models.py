"""Pydantic models that describe parsed playlist channels."""

from __future__ import annotations

import uuid
from typing import Dict, Optional

from pydantic import BaseModel, Field

VOD_EXTENSIONS = (".mp4", ".mkv", ".avi")
VOD_GROUP_MARKERS = ("VOD", "Movie")


def new_channel_id() -> str:
    return str(uuid.uuid4())


def looks_like_vod(url: str, group: Optional[str]) -> bool:
    """Guesses whether an entry is on-demand content rather than a live stream."""

    if url.endswith(VOD_EXTENSIONS) or "/movie/" in url:
        return True
    return any(marker in (group or "") for marker in VOD_GROUP_MARKERS)


class Channel(BaseModel):
    """A single playable entry extracted from an extended M3U playlist."""

    id: str = Field(default_factory=new_channel_id)
    name: str
    url: str
    logo: Optional[str] = None
    group: Optional[str] = None
    tvg_id: Optional[str] = None
    tvg_name: Optional[str] = None
    language: Optional[str] = None
    duration: Optional[float] = None
    is_vod: bool = False
    attributes: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_live(self) -> bool:
        return not self.is_vod

    def is_in_group(self, group_name: Optional[str]) -> bool:
        if not group_name or not group_name.strip():
            return True
        return self.group is not None and self.group.casefold() == group_name.casefold()

    def name_contains(self, term: Optional[str]) -> bool:
        if not term or not term.strip():
            return True
        needle = term.casefold()
        if needle in self.name.casefold():
            return True
        return self.tvg_name is not None and needle in self.tvg_name.casefold()

    def __str__(self) -> str:
        return f"{self.name} ({self.url})"
