import pytest

from tonebox.components import (
    Component,
    Custom,
    DynamicComponent,
    EventResult,
    Label,
    ProgressBar,
    ProgressUpdate,
    RenderContext,
    StatusBar,
    SwitchVariant,
    VolumeBar,
    VolumeChanged,
    VolumeFlash,
    VStack,
)


class Counter(Component):
    def __init__(self, text, visible=True, min_w=0):
        self.text = text
        self.visible = visible
        self._min_width = min_w
        self.ticks = 0
        self.events = []

    def render(self, context):
        return self.text

    def is_visible(self):
        return self.visible

    def min_width(self):
        return self._min_width

    def handle_event(self, event):
        self.events.append(event)
        return EventResult.IGNORED

    def tick(self):
        self.ticks += 1


CONTEXT = RenderContext(width=40, volume=0.5)


def test_switch_variant_changes_what_renders():
    dynamic = DynamicComponent(
        {"progress": ProgressBar(position=30.0, duration=120.0), "volume": VolumeBar()},
        active="progress",
    )
    progress_line = dynamic.render(CONTEXT)

    assert dynamic.handle_event(SwitchVariant("volume")) is EventResult.CONSUMED
    assert dynamic.active_key == "volume"
    assert dynamic.render(CONTEXT) == VolumeBar().render(CONTEXT)
    assert dynamic.render(CONTEXT) != progress_line


def test_inactive_variants_see_no_events():
    progress = ProgressBar(position=30.0, duration=120.0)
    dynamic = DynamicComponent({"progress": progress, "volume": VolumeBar()})

    assert dynamic.handle_event(ProgressUpdate(45.0)) is EventResult.CONSUMED
    assert progress.position == 45.0

    dynamic.handle_event(SwitchVariant("volume"))
    assert dynamic.handle_event(ProgressUpdate(60.0)) is EventResult.IGNORED
    assert progress.position == 45.0


def test_inactive_variants_do_not_tick():
    progress, volume = Counter("p"), Counter("v")
    dynamic = DynamicComponent({"progress": progress, "volume": volume})

    dynamic.tick()
    dynamic.set_active("volume")
    dynamic.tick()
    dynamic.tick()

    assert progress.ticks == 1
    assert volume.ticks == 2


def test_switch_is_not_forwarded_to_the_variant():
    active = Counter("a")
    dynamic = DynamicComponent({"a": active, "b": Counter("b")})
    dynamic.handle_event(SwitchVariant("b"))
    assert active.events == []


def test_visibility_and_min_width_follow_the_active_variant():
    dynamic = DynamicComponent({"shown": Counter("s", min_w=4), "hidden": Counter("h", visible=False, min_w=9)})
    assert dynamic.is_visible()
    assert dynamic.min_width() == 4
    dynamic.set_active("hidden")
    assert not dynamic.is_visible()
    assert dynamic.min_width() == 9


def test_switch_through_a_stack():
    dynamic = DynamicComponent({"progress": ProgressBar(), "volume": VolumeBar()})
    stack = VStack([StatusBar(), dynamic])
    assert stack.handle_event(SwitchVariant("volume")) is EventResult.CONSUMED
    assert dynamic.active_key == "volume"


def test_targeted_switch_only_matches_its_target():
    outer_inner = DynamicComponent({"x": Label("x"), "y": Label("y")}, name="inner")
    outer = DynamicComponent({"main": outer_inner, "other": Label("o")}, name="outer")

    assert outer.handle_event(SwitchVariant("y", target="inner")) is EventResult.CONSUMED
    assert outer.active_key == "main"
    assert outer_inner.active_key == "y"


def test_unknown_variant_is_ignored_and_active_key_stays_valid(caplog):
    dynamic = DynamicComponent({"a": Label("a"), "b": Label("b")}, name="middle")

    assert dynamic.handle_event(SwitchVariant("missing")) is EventResult.IGNORED
    assert dynamic.handle_event(SwitchVariant("missing", target="middle")) is EventResult.IGNORED
    assert dynamic.active_key == "a"
    assert "ignoring switch to unknown variant 'missing'" in caplog.text

    with pytest.raises(KeyError):
        dynamic.set_active("missing")
    assert dynamic.active_key in dynamic.keys()


def test_set_active_reports_changes():
    dynamic = DynamicComponent({"a": Label("a"), "b": Label("b")})
    assert dynamic.set_active("b") is True
    assert dynamic.set_active("b") is False


def test_construction_requires_valid_variants():
    with pytest.raises(ValueError):
        DynamicComponent({})
    with pytest.raises(ValueError):
        DynamicComponent({"a": Label("a")}, active="b")
    assert DynamicComponent({"first": Label("1"), "second": Label("2")}).active_key == "first"


def test_volume_flash_shows_volume_then_returns():
    flash = VolumeFlash({"progress": Counter("p"), "volume": Counter("v")}, duration_ticks=3)
    assert flash.active_key == "progress"

    assert flash.handle_event(VolumeChanged(0.4)) is EventResult.CONSUMED
    assert flash.render(CONTEXT) == "v"

    flash.tick()
    flash.tick()
    assert flash.active_key == "volume"
    flash.tick()
    assert flash.active_key == "progress"
    assert flash.remaining_ticks == 0


def test_volume_flash_restarts_countdown_on_each_change():
    flash = VolumeFlash({"progress": Counter("p"), "volume": Counter("v")}, duration_ticks=2)
    flash.handle_event(VolumeChanged(0.4))
    flash.tick()
    flash.handle_event(VolumeChanged(0.5))
    flash.tick()
    assert flash.active_key == "volume"
    flash.tick()
    assert flash.active_key == "progress"


def test_volume_flash_explicit_switch_cancels_countdown():
    flash = VolumeFlash({"progress": Counter("p"), "volume": Counter("v")}, duration_ticks=2)
    flash.handle_event(VolumeChanged(0.4))
    assert flash.handle_event(SwitchVariant("volume")) is EventResult.CONSUMED
    flash.tick()
    flash.tick()
    assert flash.active_key == "volume"


def test_volume_flash_forwards_other_events_to_active_variant():
    progress = Counter("p")
    flash = VolumeFlash({"progress": progress, "volume": Counter("v")})
    flash.handle_event(Custom("x"))
    assert progress.events == [Custom("x")]


def test_volume_flash_validates_its_keys():
    with pytest.raises(ValueError):
        VolumeFlash({"progress": Label("p")})
    with pytest.raises(ValueError):
        VolumeFlash({"progress": Label("p"), "volume": Label("v")}, duration_ticks=0)


def test_failed_volume_flash_leaves_variants_free():
    progress = Label("p")
    with pytest.raises(ValueError):
        VolumeFlash({"progress": progress})
    assert progress.owner is None

    volume = Label("v")
    with pytest.raises(ValueError):
        VolumeFlash({"progress": progress, "volume": volume}, duration_ticks=0)
    assert VStack([progress, volume]).child_count() == 2


def test_failed_construction_releases_adopted_variants():
    shared = Label("same")
    with pytest.raises(ValueError):
        DynamicComponent({"a": shared, "b": shared})
    assert shared.owner is None

    fresh, taken = Label("fresh"), Label("taken")
    VStack([taken])
    with pytest.raises(ValueError):
        DynamicComponent({"fresh": fresh, "taken": taken})
    assert fresh.owner is None


def test_variant_lookup():
    first, second = Label("a"), Label("b")
    dynamic = DynamicComponent({"first": first, "second": second})
    assert dynamic.variant("second") is second
    assert second.owner is dynamic
    assert dynamic.keys() == ["first", "second"]
    with pytest.raises(KeyError):
        dynamic.variant("third")
