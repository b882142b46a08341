"""Turns player state changes into component events and feeds them to a window.

The pipeline is the only piece meant to be shared with other threads:
``publish`` may be called from anywhere, while ``update``, ``pump``,
``tick`` and ``step`` must run on the thread that owns the component tree.
"""

from __future__ import annotations

import queue

from loguru import logger

from .components import (
    BookmarkChanged,
    EventResult,
    PlaybackStateChanged,
    ProgressUpdate,
    RenderContext,
    Tick,
    TrackChanged,
    VolumeChanged,
)
from .components.events import ComponentEvent
from .window import Window


def diff_snapshots(previous: RenderContext | None, current: RenderContext) -> list[ComponentEvent]:
    """Events describing how ``current`` differs from ``previous``.

    The first snapshot (``previous`` is None) produces no events. Width is
    owned by the window and never compared.
    """
    if previous is None:
        return []

    events: list[ComponentEvent] = []
    if current.playback_state != previous.playback_state:
        events.append(PlaybackStateChanged(current.playback_state))
    if current.track != previous.track:
        events.append(TrackChanged(current.track))
    if current.volume != previous.volume:
        events.append(VolumeChanged(current.volume))
    if current.bookmarked != previous.bookmarked:
        events.append(BookmarkChanged(current.bookmarked))
    if current.position != previous.position:
        duration = current.track.duration if current.track else None
        events.append(ProgressUpdate(current.position, duration))
    return events


class EventPipeline:
    """Queues events for a window and delivers them one at a time.

    Args:
        window: Window whose tree receives the events
        max_batch: Upper bound on events delivered by a single ``pump``
    """

    def __init__(self, window: Window, max_batch: int = 100) -> None:
        self.window = window
        self.max_batch = max_batch
        self._queue: queue.Queue[ComponentEvent] = queue.Queue()
        self._previous: RenderContext | None = None

    def publish(self, event: ComponentEvent) -> None:
        self._queue.put(event)

    def pending(self) -> int:
        return self._queue.qsize()

    def update(self, snapshot: RenderContext) -> list[ComponentEvent]:
        """Record a new player snapshot and publish the events it implies."""
        events = diff_snapshots(self._previous, snapshot)
        self._previous = snapshot
        self.window.set_context(snapshot)
        for event in events:
            self.publish(event)
        return events

    def pump(self, max_items: int | None = None) -> list[tuple[ComponentEvent, EventResult]]:
        """Dispatch pending events in arrival order.

        Returns:
            Each delivered event paired with the tree's result
        """
        limit = self.max_batch if max_items is None else max_items
        delivered: list[tuple[ComponentEvent, EventResult]] = []
        for _ in range(limit):
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            result = self.window.dispatch(event)
            logger.debug(f"EventPipeline: {type(event).__name__} -> {result.value}")
            delivered.append((event, result))
        return delivered

    def tick(self) -> EventResult:
        return self.window.dispatch(Tick())

    def step(self) -> str:
        """Run one driver iteration: tick, deliver pending events, render.

        Returns:
            The freshly rendered frame
        """
        self.tick()
        self.pump()
        return self.window.render_frame()
