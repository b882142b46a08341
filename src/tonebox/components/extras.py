"""Optional widgets: spectrum visualizer, synced lyrics, network indicator,
playlist window and equalizer preset selector."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import ClassVar

from loguru import logger
import numpy as np
from numpy.typing import ArrayLike, NDArray
from rich.cells import cell_len

from .base import Component, fit
from .context import RenderContext
from .events import ComponentEvent, Custom, EventResult
from .widgets import format_duration

# Block characters for 8-level bars (empty to full)
SPECTRUM_BLOCKS = "▁▂▃▄▅▆▇█"


class SpectrumAnalyzer(Component):
    """Renders band levels (0.0 - 1.0) as a row of block characters.

    Levels arrive through ``Custom("spectrum", levels)`` events, usually
    published by whatever decodes the audio. Missing bands read as silence.
    """

    def __init__(self, bars: int = 20) -> None:
        if bars <= 0:
            raise ValueError("SpectrumAnalyzer needs at least one bar")
        self.bars = bars
        self._levels: NDArray[np.float32] = np.zeros(bars, dtype=np.float32)

    @property
    def levels(self) -> NDArray[np.float32]:
        return self._levels.copy()

    def update_spectrum(self, data: ArrayLike) -> None:
        values = np.asarray(data, dtype=np.float32).ravel()[: self.bars]
        levels = np.zeros(self.bars, dtype=np.float32)
        levels[: values.size] = values
        self._levels = np.clip(np.nan_to_num(levels), 0.0, 1.0)

    def handle_event(self, event: ComponentEvent) -> EventResult:
        match event:
            case Custom(name="spectrum", payload=payload) if payload is not None:
                try:
                    self.update_spectrum(payload)
                except (TypeError, ValueError):
                    logger.debug(f"SpectrumAnalyzer: unusable levels {payload!r}")
                    return EventResult.IGNORED
                return EventResult.CONSUMED
        return EventResult.IGNORED

    def render(self, context: RenderContext) -> str:
        bar_width = max(1, context.width // self.bars)
        # Map 0.0-1.0 onto block indices 0-7
        indices = np.clip((self._levels * (len(SPECTRUM_BLOCKS) - 1)).astype(int), 0, len(SPECTRUM_BLOCKS) - 1)
        line = "".join(SPECTRUM_BLOCKS[i] * bar_width for i in indices)
        return fit(line, context.width)

    def min_width(self) -> int:
        return self.bars * 2


class LyricsDisplay(Component):
    """Shows the lyric line for the current playback position."""

    def __init__(self, lyrics: Sequence[tuple[float, str]] = (), show_timestamp: bool = False) -> None:
        self.show_timestamp = show_timestamp
        self._lyrics: list[tuple[float, str]] = []
        self.load_lyrics(lyrics)

    def load_lyrics(self, lyrics: Sequence[tuple[float, str]]) -> None:
        self._lyrics = sorted(lyrics, key=lambda line: line[0])

    def line_at(self, position: float) -> int | None:
        current = None
        for i, (start, _) in enumerate(self._lyrics):
            if position < start:
                break
            current = i
        return current

    def render(self, context: RenderContext) -> str:
        if not self._lyrics:
            return fit("No lyrics available", context.width)

        index = self.line_at(context.position)
        if index is None:
            return fit("♪ ♪ ♪", context.width)

        start, line = self._lyrics[index]
        if self.show_timestamp:
            line = f"[{format_duration(start)}] {line}"
        return fit(line, context.width)


class ConnectionStatus(Enum):
    CONNECTED = "connected"
    BUFFERING = "buffering"
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"


_STATUS_ICONS = {
    ConnectionStatus.CONNECTED: "●",
    ConnectionStatus.BUFFERING: "◐",
    ConnectionStatus.DISCONNECTED: "○",
    ConnectionStatus.CONNECTING: "◑",
}


class NetworkStatus(Component):
    """Connection indicator, an icon alone or with its label.

    Updated with ``Custom("network", "<status>")``; unknown status names are
    ignored.
    """

    expand = False

    def __init__(self, show_details: bool = False) -> None:
        self.show_details = show_details
        self.status = ConnectionStatus.CONNECTED

    def handle_event(self, event: ComponentEvent) -> EventResult:
        match event:
            case Custom(name="network", payload=payload):
                try:
                    self.status = ConnectionStatus(payload)
                except ValueError:
                    return EventResult.IGNORED
                return EventResult.CONSUMED
        return EventResult.IGNORED

    def render(self, context: RenderContext) -> str:
        icon = _STATUS_ICONS[self.status]
        text = f"{icon} {self.status.value.capitalize()}" if self.show_details else icon
        return fit(text, context.width)

    def min_width(self) -> int:
        return 15 if self.show_details else 1


class PlaylistView(Component):
    """A few playlist entries around the current one, one per line.

    The current entry is marked with ``▶``. It follows the context's track
    when the track's display name is in the playlist and falls back to the
    index given to ``set_current`` otherwise. ``Custom("playlist", names)``
    replaces the entries.
    """

    MARKER: ClassVar[str] = "▶ "

    def __init__(self, max_visible: int = 3, tracks: Sequence[str] = ()) -> None:
        if max_visible < 1:
            raise ValueError("PlaylistView needs to show at least one entry")
        self.max_visible = max_visible
        self.tracks: list[str] = []
        self.current_index = 0
        self.set_tracks(tracks)

    def set_tracks(self, tracks: Sequence[str]) -> None:
        self.tracks = list(tracks)
        self.set_current(self.current_index)

    def set_current(self, index: int) -> None:
        self.current_index = max(0, min(index, len(self.tracks) - 1))

    def _current(self, context: RenderContext) -> int:
        if context.track is not None and context.track.display_name in self.tracks:
            return self.tracks.index(context.track.display_name)
        return self.current_index

    def handle_event(self, event: ComponentEvent) -> EventResult:
        match event:
            case Custom(name="playlist", payload=list(names) | tuple(names)):
                self.set_tracks([str(name) for name in names])
                return EventResult.CONSUMED
        return EventResult.IGNORED

    def render(self, context: RenderContext) -> str:
        if not self.tracks:
            return fit("No tracks in playlist", context.width)

        current = self._current(context)
        # Keep the window full near the end of the list
        start = max(0, min(current - self.max_visible // 2, len(self.tracks) - self.max_visible))
        lines = []
        for index in range(start, min(start + self.max_visible, len(self.tracks))):
            prefix = self.MARKER if index == current else " " * cell_len(self.MARKER)
            lines.append(fit(prefix + self.tracks[index], context.width))
        return "\n".join(lines)

    def min_width(self) -> int:
        return cell_len(self.MARKER) + 1


class EqualizerPreset(Component):
    """Selected equalizer preset, e.g. ``EQ: Bass Boost``.

    ``Custom("equalizer", "next")`` and ``Custom("equalizer", "previous")``
    cycle through the presets; any other payload naming a preset selects it.
    """

    expand = False

    DEFAULT_PRESETS: ClassVar[tuple[str, ...]] = ("Flat", "Bass Boost", "Vocal", "Classical", "Rock")

    def __init__(self, presets: Sequence[str] | None = None) -> None:
        self.presets = list(self.DEFAULT_PRESETS if presets is None else presets)
        if not self.presets:
            raise ValueError("EqualizerPreset needs at least one preset")
        self._current = 0

    @property
    def preset(self) -> str:
        return self.presets[self._current]

    def next_preset(self) -> None:
        self._current = (self._current + 1) % len(self.presets)

    def previous_preset(self) -> None:
        self._current = (self._current - 1) % len(self.presets)

    def handle_event(self, event: ComponentEvent) -> EventResult:
        match event:
            case Custom(name="equalizer", payload="next"):
                self.next_preset()
            case Custom(name="equalizer", payload="previous"):
                self.previous_preset()
            case Custom(name="equalizer", payload=str(preset)) if preset in self.presets:
                self._current = self.presets.index(preset)
            case _:
                return EventResult.IGNORED
        return EventResult.CONSUMED

    def render(self, context: RenderContext) -> str:
        return fit(f"EQ: {self.preset}", context.width)

    def min_width(self) -> int:
        return cell_len("EQ: ") + max(cell_len(preset) for preset in self.presets)
