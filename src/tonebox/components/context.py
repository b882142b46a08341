"""Per-frame render snapshot shared by every node of a component tree."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType


class PlaybackState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"
    BUFFERING = "buffering"


@dataclass(frozen=True, slots=True)
class TrackInfo:
    """Metadata for the track currently loaded by the player."""

    name: str
    display_name: str
    duration: float | None = None  # seconds, None while unknown


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Immutable snapshot handed down the tree for a single render pass.

    Built by the window from the latest player snapshot. Containers that
    subdivide width derive narrower copies with ``with_width``; nothing in
    the tree mutates it.
    """

    width: int
    playback_state: PlaybackState = PlaybackState.STOPPED
    track: TrackInfo | None = None
    volume: float = 1.0  # 0.0 - 1.0
    position: float = 0.0  # seconds
    bookmarked: bool = False
    borderless: bool = False
    bitrate_kbps: int | None = None
    extras: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def with_width(self, width: int) -> RenderContext:
        return replace(self, width=max(0, width))
