"""Leaf widgets for the player screen.

Every widget here maps a ``RenderContext`` (plus a little state of its own)
to a single line of text that already fits the width it was given. None of
them can fail: when the context is narrower than ``min_width`` the output
is simply cropped.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

from rich.cells import cell_len

from .base import Component, fit
from .context import PlaybackState, RenderContext
from .events import ComponentEvent, EventResult, ProgressUpdate


def format_duration(seconds: float) -> str:
    """Format seconds as MM:SS."""
    mins, secs = divmod(int(max(0.0, seconds)), 60)
    return f"{mins:02d}:{secs:02d}"


def _bar(fill: str, empty: str, filled: int, width: int) -> str:
    filled = max(0, min(filled, width))
    return fill * filled + empty * (width - filled)


class Label(Component):
    """Fixed text, never stretched by row layouts."""

    expand = False

    def __init__(self, text: str) -> None:
        self.text = text

    def render(self, context: RenderContext) -> str:
        return fit(self.text, context.width)

    def min_width(self) -> int:
        return cell_len(self.text)


class StatusBar(Component):
    """Current playback state followed by the track name.

    Renders as ``playing *Track Name`` where the asterisk marks a bookmarked
    track. While the player is buffering, a spinner replaces the track name.
    The spinner frame belongs to this widget and only moves on ``tick``.
    """

    SPINNER: ClassVar[str] = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

    def __init__(self, show_bookmark: bool = True) -> None:
        self.show_bookmark = show_bookmark
        self._frame = 0

    @property
    def frame(self) -> int:
        return self._frame

    def tick(self) -> None:
        self._frame = (self._frame + 1) % len(self.SPINNER)

    def render(self, context: RenderContext) -> str:
        state = context.playback_state
        status = state.value
        if state is PlaybackState.BUFFERING:
            text = f"{status} {self.SPINNER[self._frame]}"
        elif context.track is not None and state in (PlaybackState.PLAYING, PlaybackState.PAUSED):
            bookmark = "*" if self.show_bookmark and context.bookmarked else ""
            text = f"{status} {bookmark}{context.track.display_name}"
        else:
            text = status
        return fit(text, context.width)

    def min_width(self) -> int:
        return len(PlaybackState.BUFFERING.value) + 2


class ProgressBar(Component):
    """Playback progress as `` [////      ] 00:30/02:00 ``.

    By default position and duration come from the context. A bar built with
    its own ``position`` tracks it independently: it consumes
    ``ProgressUpdate`` events and ignores the context position.
    """

    def __init__(
        self,
        position: float | None = None,
        duration: float | None = None,
        show_time: bool = True,
        fill_char: str = "/",
        empty_char: str = " ",
    ) -> None:
        self.position = position
        self.duration = duration
        self.show_time = show_time
        self.fill_char = fill_char
        self.empty_char = empty_char

    def handle_event(self, event: ComponentEvent) -> EventResult:
        if self.position is None:
            return EventResult.IGNORED
        match event:
            case ProgressUpdate(position=position, duration=duration):
                self.position = position
                if duration is not None:
                    self.duration = duration
                return EventResult.CONSUMED
        return EventResult.IGNORED

    def render(self, context: RenderContext) -> str:
        position = context.position if self.position is None else self.position
        duration = self.duration
        if duration is None and context.track is not None:
            duration = context.track.duration

        # " [" + "] " + "MM:SS/MM:SS" + " " around the bar
        bar_width = max(0, context.width - (16 if self.show_time else 4))
        filled = round(position / duration * bar_width) if duration else 0
        bar = _bar(self.fill_char, self.empty_char, filled, bar_width)

        if self.show_time:
            total = format_duration(duration) if duration else "00:00"
            text = f" [{bar}] {format_duration(position)}/{total} "
        else:
            text = f" [{bar}] "
        return fit(text, context.width)

    def min_width(self) -> int:
        return 20 if self.show_time else 5


class VolumeBar(Component):
    """Volume level as `` volume: [//////    ]  60% ``."""

    def __init__(self, show_percentage: bool = True, fill_char: str = "/", empty_char: str = " ") -> None:
        self.show_percentage = show_percentage
        self.fill_char = fill_char
        self.empty_char = empty_char

    def render(self, context: RenderContext) -> str:
        volume = max(0.0, min(1.0, context.volume))
        bar_width = max(0, context.width - (17 if self.show_percentage else 12))
        bar = _bar(self.fill_char, self.empty_char, round(volume * bar_width), bar_width)
        text = f" volume: [{bar}]"
        if self.show_percentage:
            text += f" {round(volume * 100):>3}% "
        else:
            text += " "
        return fit(text, context.width)

    def min_width(self) -> int:
        return 20 if self.show_percentage else 12


class ControlBar(Component):
    """Keyboard hints spread evenly across the line: ``[s]kip   [p]ause   [q]uit``."""

    DEFAULT_CONTROLS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("[s]", "kip"),
        ("[p]", "ause"),
        ("[q]", "uit"),
    )

    def __init__(self, controls: Sequence[tuple[str, str]] | None = None) -> None:
        self.controls = list(self.DEFAULT_CONTROLS if controls is None else controls)

    def _text_len(self) -> int:
        return sum(cell_len(key) + cell_len(desc) for key, desc in self.controls)

    def render(self, context: RenderContext) -> str:
        hints = [f"{key}{desc}" for key, desc in self.controls]
        if len(hints) > 1:
            spacing = max(1, (context.width - self._text_len()) // (len(hints) - 1))
        else:
            spacing = 0
        return fit((" " * spacing).join(hints), context.width)

    def min_width(self) -> int:
        return self._text_len() + max(0, len(self.controls) - 1)


class BitrateReadout(Component):
    """Stream bitrate, e.g. ``320 kbps``; ``-- kbps`` while unknown."""

    expand = False

    def render(self, context: RenderContext) -> str:
        kbps = "--" if context.bitrate_kbps is None else str(context.bitrate_kbps)
        return fit(f"{kbps} kbps", context.width)

    def min_width(self) -> int:
        return 8
