"""Components that show one of several pre-registered variants at a time."""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from .base import Component
from .context import RenderContext
from .events import ComponentEvent, EventResult, SwitchVariant, VolumeChanged


class DynamicComponent(Component):
    """Presents exactly one of a fixed set of named variants.

    Only the active variant renders, receives events and ticks; the others
    keep whatever state they had when they were switched away from. The
    active variant changes through ``set_active`` or a ``SwitchVariant``
    event, and the change is visible on the very next render.

    Args:
        variants: Variant key to component mapping, in registration order
        active: Initially active key, defaults to the first registered key
        name: Optional name matched against ``SwitchVariant.target``

    Raises:
        ValueError: If no variants are given or ``active`` is not registered
    """

    def __init__(
        self,
        variants: Mapping[str, Component],
        active: str | None = None,
        name: str | None = None,
    ) -> None:
        if not variants:
            raise ValueError("DynamicComponent needs at least one variant")
        active = next(iter(variants)) if active is None else active
        if active not in variants:
            raise ValueError(f"unknown initial variant {active!r}, expected one of {list(variants)}")

        self.name = name
        self._variants: dict[str, Component] = {}
        try:
            for key, component in variants.items():
                self._adopt(component)
                self._variants[key] = component
        except ValueError:
            # Leave the variants free for another owner
            for component in self._variants.values():
                self._release(component)
            raise
        self._active_key = active

    @property
    def active_key(self) -> str:
        return self._active_key

    @property
    def active(self) -> Component:
        return self._variants[self._active_key]

    def keys(self) -> list[str]:
        return list(self._variants)

    def variant(self, key: str) -> Component:
        return self._variants[key]

    def set_active(self, key: str) -> bool:
        """Make ``key`` the active variant.

        Returns:
            True if the active variant changed

        Raises:
            KeyError: If ``key`` is not a registered variant
        """
        if key not in self._variants:
            raise KeyError(key)
        if key == self._active_key:
            return False
        logger.debug(f"{self._label}: switching variant {self._active_key!r} -> {key!r}")
        self._active_key = key
        return True

    @property
    def _label(self) -> str:
        return self.name or type(self).__name__

    def _switch_request(self, event: ComponentEvent) -> str | None:
        """Key requested by ``event`` if it is a switch addressed to this component."""
        match event:
            case SwitchVariant(key=key, target=target) if target is None or target == self.name:
                if key in self._variants:
                    return key
                if target is not None:
                    logger.warning(f"{self._label}: ignoring switch to unknown variant {key!r}")
        return None

    def handle_event(self, event: ComponentEvent) -> EventResult:
        key = self._switch_request(event)
        if key is not None:
            self.set_active(key)
            return EventResult.CONSUMED
        return self.active.handle_event(event)

    def render(self, context: RenderContext) -> str:
        return self.active.render(context)

    def is_visible(self) -> bool:
        return self.active.is_visible()

    def min_width(self) -> int:
        return self.active.min_width()

    def tick(self) -> None:
        self.active.tick()


class VolumeFlash(DynamicComponent):
    """Shows the ``flash`` variant for a few ticks after every volume change.

    A ``VolumeChanged`` event switches to ``flash`` and restarts the
    countdown; once ``duration_ticks`` ticks have passed without another
    change the component falls back to ``rest``. The event is consumed.
    Explicit ``SwitchVariant`` requests cancel a running countdown.
    """

    def __init__(
        self,
        variants: Mapping[str, Component],
        rest: str = "progress",
        flash: str = "volume",
        duration_ticks: int = 10,
        name: str | None = None,
    ) -> None:
        if flash not in variants:
            raise ValueError(f"unknown flash variant {flash!r}, expected one of {list(variants)}")
        if duration_ticks < 1:
            raise ValueError("duration_ticks must be at least 1")
        super().__init__(variants, active=rest, name=name)
        self.rest = rest
        self.flash = flash
        self.duration_ticks = duration_ticks
        self._remaining = 0

    @property
    def remaining_ticks(self) -> int:
        return self._remaining

    def handle_event(self, event: ComponentEvent) -> EventResult:
        if isinstance(event, VolumeChanged):
            self.set_active(self.flash)
            self._remaining = self.duration_ticks
            return EventResult.CONSUMED
        key = self._switch_request(event)
        if key is not None:
            self._remaining = 0
            self.set_active(key)
            return EventResult.CONSUMED
        return self.active.handle_event(event)

    def tick(self) -> None:
        super().tick()
        if self._remaining > 0:
            self._remaining -= 1
            if self._remaining == 0:
                self.set_active(self.rest)
