"""Component contract shared by every node in a tonebox tree.

Leaves, stacks and dynamic components all implement the same small surface:
render against a ``RenderContext``, report visibility and minimum width,
react to events and advance on ticks. Containers rely on nothing else, so
any node can be nested inside any container.
"""

from __future__ import annotations

from rich.cells import set_cell_size
from rich.text import Text

from .context import RenderContext
from .events import ComponentEvent, EventResult


def fit(text: str, width: int, pad: bool = True) -> str:
    """Crop ``text`` to ``width`` terminal cells, optionally padding with spaces.

    Overlong text ends with an ellipsis so truncation stays visible. Any
    width below one cell yields an empty string.

    Args:
        text: Single line of text to fit
        width: Target width in terminal cells
        pad: Whether to pad short text up to the full width

    Returns:
        Text occupying at most (exactly, when padding) ``width`` cells
    """
    if width <= 0:
        return ""
    line = Text(text)
    line.truncate(width, overflow="ellipsis", pad=pad)
    return line.plain


def crop(text: str, width: int) -> str:
    """Force ``text`` to exactly ``width`` cells without an ellipsis."""
    if width <= 0:
        return ""
    return set_cell_size(text, width)


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]


class Component:
    """Base class for every renderable node.

    Subclasses must implement ``render``. The remaining operations have
    defaults suitable for passive widgets: always visible, no minimum
    width, events ignored and ticks discarded.

    Attributes:
        priority: Row layouts hide lower priorities first when space runs out
        expand: Whether row layouts may hand this component spare columns
    """

    priority: int = 0
    expand: bool = True

    # Set by the container that owns this component.
    _owner: Component | None = None

    def render(self, context: RenderContext) -> str:
        raise NotImplementedError

    def is_visible(self) -> bool:
        return True

    def min_width(self) -> int:
        return 0

    def handle_event(self, event: ComponentEvent) -> EventResult:
        return EventResult.IGNORED

    def tick(self) -> None:
        return None

    @property
    def owner(self) -> Component | None:
        return self._owner

    def _adopt(self, child: Component) -> None:
        """Claim exclusive ownership of ``child``.

        Raises:
            ValueError: If the child already has an owner or adopting it would
                make this component its own ancestor.
        """
        if child._owner is not None:
            raise ValueError(f"{type(child).__name__} already belongs to {type(child._owner).__name__}")
        node: Component | None = self
        while node is not None:
            if node is child:
                raise ValueError(f"adding {type(child).__name__} would create a cycle")
            node = node._owner
        child._owner = self

    def _release(self, child: Component) -> None:
        child._owner = None
