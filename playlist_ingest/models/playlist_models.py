"""Models for a whole parsed playlist and the views callers build on it."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .channel_models import Channel

DEFAULT_PLAYLIST_NAME = "IPTV Playlist"
UNGROUPED_LABEL = "Uncategorized"


class Playlist(BaseModel):
    """Channels from one playlist plus the metadata carried by its header line."""

    name: str = DEFAULT_PLAYLIST_NAME
    source: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)
    channels: List[Channel] = Field(default_factory=list)

    def channel_count(self) -> int:
        return len(self.channels)

    def channels_by_group(self, group_name: Optional[str]) -> List[Channel]:
        return [channel for channel in self.channels if channel.is_in_group(group_name)]

    def search(self, term: Optional[str]) -> List[Channel]:
        return [channel for channel in self.channels if channel.name_contains(term)]

    def grouped(self, default: str = UNGROUPED_LABEL) -> Dict[str, List[Channel]]:
        """Buckets channels by group label, keeping first-seen group order."""

        groups: Dict[str, List[Channel]] = {}
        for channel in self.channels:
            groups.setdefault(channel.group or default, []).append(channel)
        return groups
