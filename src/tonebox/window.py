"""Top-level owner of a component tree and its display configuration."""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from .components import Component, Custom, EventResult, RenderContext, Resize, Tick, fit
from .components.events import ComponentEvent


class Window:
    """Root of the player screen.

    Holds the root component, the rendering width and the border flag, and
    turns the latest player snapshot into text frames. The width only changes
    through ``Resize`` events; the border flag is fixed for the lifetime of
    the window.

    Args:
        root: Component rendered as the window body
        width: Inner width in terminal cells (borders excluded)
        borderless: Render without the box-drawing frame
        snapshot: Initial player snapshot, replaced through ``set_context``

    Raises:
        ValueError: If ``width`` is negative
    """

    def __init__(
        self,
        root: Component,
        width: int,
        borderless: bool = False,
        snapshot: RenderContext | None = None,
    ) -> None:
        if width < 0:
            raise ValueError(f"window width must not be negative, got {width}")
        self._root = root
        self._width = width
        self._borderless = borderless
        self._snapshot = snapshot or RenderContext(width=width, borderless=borderless)

    @property
    def root(self) -> Component:
        return self._root

    @property
    def width(self) -> int:
        return self._width

    @property
    def borderless(self) -> bool:
        return self._borderless

    @property
    def snapshot(self) -> RenderContext:
        return self._snapshot

    def set_context(self, snapshot: RenderContext) -> None:
        """Store the player snapshot used by subsequent frames."""
        self._snapshot = snapshot

    def context(self) -> RenderContext:
        """Render context for the next frame: the snapshot with this window's width and border flag."""
        return replace(self._snapshot, width=self._width, borderless=self._borderless)

    def render_frame(self) -> str:
        """Render the whole tree into a newline-delimited text block.

        Every body line is fitted to the window width and framed as::

            ┌──────┐
            │ body │
            └──────┘

        A borderless window drops the top and bottom rules and draws spaces
        in place of the side bars, so the body keeps the same two-column
        margins and lines up with a bordered one.

        Calling this repeatedly without dispatching events or ticks returns
        the same text.
        """
        body = self._root.render(self.context())
        lines = [fit(line, self._width) for line in body.split("\n")]
        if self._borderless:
            return "\n".join(f"  {line}  " for line in lines)

        rule = "─" * (self._width + 2)
        framed = [f"┌{rule}┐", *(f"│ {line} │" for line in lines), f"└{rule}┘"]
        return "\n".join(framed)

    def tick(self) -> None:
        self._root.tick()

    def dispatch(self, event: ComponentEvent) -> EventResult:
        """Deliver one event to the tree, top-down.

        ``Resize`` updates the window width before the tree sees it and
        ``Tick`` advances the tree first. Unhandled custom events end here.
        """
        match event:
            case Resize(width=width):
                width = max(0, width)
                if width != self._width:
                    logger.debug(f"Window: resized from {self._width} to {width} columns")
                    self._width = width
            case Tick():
                self._root.tick()

        result = self._root.handle_event(event)
        if not result.consumed and isinstance(event, Custom):
            logger.debug(f"Window: dropping unhandled custom event {event.name!r}")
        return result
