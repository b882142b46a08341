"""tonebox TUI - interactive driver for the player screen.

Hosts a ``Window`` inside a Textual application: a timer delivers ticks
and player snapshots, key bindings drive a simulated player, and every
frame is shown in a single ``Static`` widget. The component tree only
ever sees snapshots and events; everything terminal-specific stays here.
"""

from __future__ import annotations

from collections.abc import Sequence
import sys
import threading
from typing import ClassVar

from loguru import logger
import numpy as np
from numpy.typing import NDArray
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .components import Custom, PlaybackState, RenderContext, TrackInfo
from .config import PlayerUIConfig
from .layouts import build_window
from .pipeline import EventPipeline
from .window import Window

DEMO_TRACKS: tuple[TrackInfo, ...] = (
    TrackInfo("midnight_rain", "Midnight Rain", duration=142.0),
    TrackInfo("paper_lanterns", "Paper Lanterns", duration=188.0),
    TrackInfo("slow_tide", "Slow Tide", duration=121.0),
)


class SimulatedPlayer:
    """Stand-in for an audio backend that loops over a fixed playlist.

    Thread-safe so a real decoder thread could drive it; the UI only reads
    it through ``snapshot``.
    """

    def __init__(
        self,
        tracks: Sequence[TrackInfo] = DEMO_TRACKS,
        volume: float = 0.8,
        bitrate_kbps: int | None = 320,
    ) -> None:
        if not tracks:
            raise ValueError("SimulatedPlayer needs at least one track")
        self._lock = threading.Lock()
        self._tracks = list(tracks)
        self._index = 0
        self._position = 0.0
        self._state = PlaybackState.PLAYING
        self._volume = max(0.0, min(1.0, volume))
        self._bookmarked = False
        self._bitrate_kbps = bitrate_kbps

    def advance(self, seconds: float) -> None:
        with self._lock:
            if self._state is not PlaybackState.PLAYING:
                return
            self._position += seconds
            duration = self._tracks[self._index].duration
            if duration is not None and self._position >= duration:
                self._next_track()

    def toggle_pause(self) -> None:
        with self._lock:
            if self._state is PlaybackState.PLAYING:
                self._state = PlaybackState.PAUSED
            else:
                self._state = PlaybackState.PLAYING

    def change_volume(self, delta: float) -> None:
        with self._lock:
            self._volume = round(max(0.0, min(1.0, self._volume + delta)), 2)

    def toggle_bookmark(self) -> None:
        with self._lock:
            self._bookmarked = not self._bookmarked

    def skip(self) -> None:
        with self._lock:
            self._next_track()

    def _next_track(self) -> None:
        self._index = (self._index + 1) % len(self._tracks)
        self._position = 0.0
        self._bookmarked = False

    def track_names(self) -> list[str]:
        return [track.display_name for track in self._tracks]

    def spectrum(self, bars: int = 20) -> NDArray[np.float32]:
        """Fake band levels that drift with the playback position; silent unless playing."""
        with self._lock:
            if self._state is not PlaybackState.PLAYING:
                return np.zeros(bars, dtype=np.float32)
            phase = self._position * 3.0 + np.arange(bars) * 0.6
        return (0.5 + 0.5 * np.sin(phase)).astype(np.float32)

    def snapshot(self) -> RenderContext:
        # Width is owned by the window and filled in at render time
        with self._lock:
            return RenderContext(
                width=0,
                playback_state=self._state,
                track=self._tracks[self._index],
                volume=self._volume,
                position=self._position,
                bookmarked=self._bookmarked,
                bitrate_kbps=self._bitrate_kbps,
            )


class PlayerApp(App[None]):
    """Textual app showing the tonebox player screen."""

    BINDINGS: ClassVar[list[Binding | tuple[str, str] | tuple[str, str, str]]] = [
        Binding(key="q", action="quit", description="Quit"),
        Binding(key="p", action="toggle_pause", description="Pause"),
        Binding(key="s", action="skip", description="Skip"),
        Binding(key="b", action="bookmark", description="Bookmark"),
        Binding(key="e", action="equalizer", description="Equalizer"),
        Binding(key="plus", action="volume(0.1)", description="Volume up", key_display="+"),
        Binding(key="minus", action="volume(-0.1)", description="Volume down", key_display="-"),
    ]

    CSS = """
    #frame {
        width: auto;
        height: auto;
    }
    """
    ENABLE_COMMAND_PALETTE = False
    TITLE = "tonebox"

    def __init__(self, config: PlayerUIConfig | None = None, player: SimulatedPlayer | None = None) -> None:
        super().__init__()
        self.config = config or PlayerUIConfig()
        self.player = player or SimulatedPlayer()
        self.window: Window = build_window(self.config, self.player.snapshot())
        self.pipeline = EventPipeline(self.window)
        self.pipeline.update(self.player.snapshot())
        if self.config.layout == "advanced":
            self.pipeline.publish(Custom("playlist", self.player.track_names()))
            self.pipeline.pump()

    def compose(self) -> ComposeResult:
        yield Static(Text(self.window.render_frame()), id="frame", markup=False)

    def on_mount(self) -> None:
        self.set_interval(self.config.tick_interval_s, self._on_tick)

    def _on_tick(self) -> None:
        """Advance the simulated player, then tick, deliver events and redraw."""
        self.player.advance(self.config.tick_interval_s)
        if self.config.layout == "advanced":
            self.pipeline.publish(Custom("spectrum", self.player.spectrum()))
        self.pipeline.update(self.player.snapshot())
        self._show(self.pipeline.step())

    def _sync(self) -> None:
        """Deliver events caused by a key press and redraw without ticking."""
        self.pipeline.update(self.player.snapshot())
        self.pipeline.pump()
        self._show(self.window.render_frame())

    def _show(self, frame: str) -> None:
        self.query_one("#frame", Static).update(Text(frame))

    def action_toggle_pause(self) -> None:
        self.player.toggle_pause()
        self._sync()

    def action_skip(self) -> None:
        self.player.skip()
        self._sync()

    def action_bookmark(self) -> None:
        self.player.toggle_bookmark()
        self._sync()

    def action_volume(self, delta: float) -> None:
        self.player.change_volume(delta)
        self._sync()

    def action_equalizer(self) -> None:
        self.pipeline.publish(Custom("equalizer", "next"))
        self._sync()

    @classmethod
    def run_app(cls, config: PlayerUIConfig | None = None) -> None:
        """Configure logging and run the app until the user quits."""
        logger.remove()
        logger.add(sys.stderr, level="WARNING")
        try:
            cls(config).run()
        except KeyboardInterrupt:
            logger.info("Application interrupted by user. Exiting.")
        except Exception:
            logger.opt(exception=True).critical("Unhandled exception in app run:")
            sys.exit(1)
