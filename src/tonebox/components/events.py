"""Events delivered through the component tree, one per dispatch call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .context import PlaybackState, TrackInfo


class EventResult(Enum):
    CONSUMED = "consumed"
    IGNORED = "ignored"

    @property
    def consumed(self) -> bool:
        return self is EventResult.CONSUMED


@dataclass(frozen=True)
class PlaybackStateChanged:
    state: PlaybackState


@dataclass(frozen=True)
class VolumeChanged:
    volume: float


@dataclass(frozen=True)
class Resize:
    width: int


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class TrackChanged:
    track: TrackInfo | None


@dataclass(frozen=True)
class ProgressUpdate:
    position: float
    duration: float | None = None


@dataclass(frozen=True)
class BookmarkChanged:
    bookmarked: bool


@dataclass(frozen=True)
class SwitchVariant:
    """Reserved signal asking a dynamic component to change its active variant.

    ``target`` restricts the request to the dynamic component registered
    under that name; ``None`` addresses the first one reached.
    """

    key: str
    target: str | None = None


@dataclass(frozen=True)
class Custom:
    name: str
    payload: Any = None


ComponentEvent = (
    PlaybackStateChanged
    | VolumeChanged
    | Resize
    | Tick
    | TrackChanged
    | ProgressUpdate
    | BookmarkChanged
    | SwitchVariant
    | Custom
)
