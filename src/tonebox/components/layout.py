"""Containers that own child components and compose their output.

Two layouts are provided:

- ``VStack`` puts each visible child on its own line(s), every child
  receiving the full width.
- ``HStack`` places visible children side by side on a single line and
  splits the width between them (see ``allocate_widths``).

Both dispatch events top-down in child order and stop at the first child
that consumes the event.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from loguru import logger
from rich.cells import cell_len

from .base import Component, crop, first_line, fit
from .context import RenderContext
from .events import ComponentEvent, EventResult


def allocate_widths(
    min_widths: Sequence[int],
    width: int,
    expandable: Sequence[bool] | None = None,
) -> list[int]:
    """Split ``width`` columns between row slots.

    Every slot first receives its minimum. Remaining columns are shared
    equally by the expandable slots (or by every slot when none expands);
    columns left over after the equal split go one each to the leftmost
    receivers. When the minimums already exceed ``width`` they are returned
    unchanged, callers are expected to hide slots first.

    Args:
        min_widths: Minimum columns per slot, in display order
        width: Columns available to the slots (separators excluded)
        expandable: Per-slot flag telling whether the slot takes spare columns

    Returns:
        Column count per slot; sums to ``width`` whenever the minimums fit

    Example:
        >>> allocate_widths([3, 3], 11)
        [6, 5]
    """
    allotments = list(min_widths)
    slack = width - sum(allotments)
    if slack <= 0 or not allotments:
        return allotments

    flags = list(expandable) if expandable is not None else [True] * len(allotments)
    receivers = [i for i, flag in enumerate(flags) if flag] or list(range(len(allotments)))

    share, leftover = divmod(slack, len(receivers))
    for rank, index in enumerate(receivers):
        allotments[index] += share + (1 if rank < leftover else 0)
    return allotments


class Container(Component):
    """A component that exclusively owns an ordered list of children.

    Child order is render order and dispatch order. Subclasses decide how
    the rendered children are laid out; event dispatch and ticking are
    shared.
    """

    def __init__(self, children: Iterable[Component] = ()) -> None:
        self._children: list[Component] = []
        try:
            for child in children:
                self.add_child(child)
        except ValueError:
            # A half-built container must not keep its children
            for child in self._children:
                self._release(child)
            self._children.clear()
            raise

    def add_child(self, component: Component) -> None:
        self._adopt(component)
        self._children.append(component)

    def remove_child(self, index: int) -> Component | None:
        if not 0 <= index < len(self._children):
            return None
        child = self._children.pop(index)
        self._release(child)
        return child

    def child_count(self) -> int:
        return len(self._children)

    def get_child(self, index: int) -> Component | None:
        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def __iter__(self) -> Iterator[Component]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def visible_children(self) -> list[Component]:
        return [child for child in self._children if child.is_visible()]

    def on_event(self, event: ComponentEvent) -> EventResult:
        """Hook for containers that react to events themselves.

        Runs before the children see the event; returning ``CONSUMED`` keeps
        the event away from them.
        """
        return EventResult.IGNORED

    def handle_event(self, event: ComponentEvent) -> EventResult:
        if self.on_event(event).consumed:
            return EventResult.CONSUMED
        for child in self._children:
            if child.is_visible() and child.handle_event(event).consumed:
                return EventResult.CONSUMED
        return EventResult.IGNORED

    def tick(self) -> None:
        for child in self._children:
            child.tick()


class VStack(Container):
    """Stacks visible children vertically, separated by ``spacing`` blank lines.

    Each child gets the full context width, capped at ``max_width`` when set,
    and is responsible for fitting its own lines. Invisible children take no
    space at all.
    """

    def __init__(
        self,
        children: Iterable[Component] = (),
        spacing: int = 0,
        max_width: int | None = None,
    ) -> None:
        super().__init__(children)
        self.spacing = max(0, spacing)
        self.max_width = max_width

    def render(self, context: RenderContext) -> str:
        if self.max_width is not None and context.width > self.max_width:
            context = context.with_width(self.max_width)
        blocks = [child.render(context) for child in self._children if child.is_visible()]
        return ("\n" * (self.spacing + 1)).join(blocks)

    def min_width(self) -> int:
        return max((child.min_width() for child in self.visible_children()), default=0)


@dataclass(slots=True)
class _Slot:
    index: int
    child: Component
    visible: bool
    min_width: int


class HStack(Container):
    """Lays visible children out side by side on one line.

    Width is divided with ``allocate_widths``. When the children's minimum
    widths (plus separators) exceed the available width, children are
    dropped lowest ``priority`` first, rightmost first among equals, until
    the rest fits. If nothing fits, the row shows ``fallback`` or, without
    one, the highest-priority child squeezed into the full width. A row
    whose children are all invisible renders nothing but reserved blanks,
    and reserved blanks never take spare columns.

    Args:
        children: Initial children in display order
        separator: Text placed between adjacent slots
        reserve_hidden: Keep a blank slot of ``min_width`` columns for
            invisible children so columns stay aligned across frames
        fallback: Summary shown when no child fits
    """

    def __init__(
        self,
        children: Iterable[Component] = (),
        separator: str = "",
        reserve_hidden: bool = False,
        fallback: str | None = None,
    ) -> None:
        super().__init__(children)
        self.separator = separator
        self.reserve_hidden = reserve_hidden
        self.fallback = fallback

    def _slots(self) -> list[_Slot]:
        slots = []
        for index, child in enumerate(self._children):
            visible = child.is_visible()
            if visible or self.reserve_hidden:
                slots.append(_Slot(index, child, visible, child.min_width()))
        return slots

    def _required(self, slots: Sequence[_Slot]) -> int:
        separators = cell_len(self.separator) * max(0, len(slots) - 1)
        return sum(slot.min_width for slot in slots) + separators

    def layout(self, width: int) -> list[tuple[Component, int]]:
        """Decide which children are shown and how many columns each gets.

        Invisible children only appear here when ``reserve_hidden`` is set.
        """
        slots = self._slots()
        while slots and self._required(slots) > width:
            victim = min(range(len(slots)), key=lambda i: (slots[i].child.priority, -i))
            dropped = slots.pop(victim)
            logger.debug(
                f"HStack: hiding {type(dropped.child).__name__} at index {dropped.index}, "
                f"{self._required(slots)} columns still required for width {width}"
            )

        available = width - cell_len(self.separator) * max(0, len(slots) - 1)
        min_widths = [slot.min_width for slot in slots]
        receivers = [slot.visible and slot.child.expand for slot in slots]
        if not any(receivers):
            receivers = [slot.visible for slot in slots]
        if any(receivers):
            allotments = allocate_widths(min_widths, available, receivers)
        else:
            # Only reserved blanks left; they keep their minimum
            allotments = min_widths
        return [(slot.child, allotment) for slot, allotment in zip(slots, allotments)]

    def render(self, context: RenderContext) -> str:
        visible = self.visible_children()
        placed = self.layout(context.width)
        shown = any(child.is_visible() for child, _ in placed)
        if visible and not shown:
            return self._render_fallback(context, visible)
        if not placed:
            return ""

        cells = []
        for child, allotment in placed:
            if child.is_visible():
                cells.append(crop(first_line(child.render(context.with_width(allotment))), allotment))
            else:
                cells.append(" " * allotment)
        row = self.separator.join(cells)
        if not shown:
            row += " " * (context.width - cell_len(row))
        return row

    def _render_fallback(self, context: RenderContext, visible: list[Component]) -> str:
        if self.fallback is not None:
            return fit(self.fallback, context.width)
        # Highest priority wins, leftmost among equals
        best = max(visible, key=lambda child: child.priority)
        return fit(first_line(best.render(context)), context.width)

    def min_width(self) -> int:
        return self._required(self._slots())
