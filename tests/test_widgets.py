from rich.cells import cell_len

from tonebox.components import (
    BitrateReadout,
    ControlBar,
    EventResult,
    Label,
    PlaybackState,
    ProgressBar,
    ProgressUpdate,
    RenderContext,
    StatusBar,
    TrackInfo,
    VolumeBar,
    fit,
    format_duration,
)

TRACK = TrackInfo("test_track", "Test Track", duration=120.0)


def test_fit_pads_crops_and_handles_zero_width():
    assert fit("abc", 5) == "abc  "
    assert fit("abc", 5, pad=False) == "abc"
    assert fit("abcdef", 4) == "abc…"
    assert fit("abc", 0) == ""
    assert fit("abc", -2) == ""


def test_format_duration():
    assert format_duration(0) == "00:00"
    assert format_duration(125.7) == "02:05"
    assert format_duration(-4) == "00:00"


def test_render_context_with_width_never_goes_negative():
    context = RenderContext(width=40, volume=0.3)
    narrowed = context.with_width(-3)
    assert narrowed.width == 0
    assert narrowed.volume == 0.3
    assert context.width == 40


def test_label_fits_its_text():
    label = Label("hello")
    assert label.min_width() == 5
    assert label.render(RenderContext(width=8)) == "hello   "
    assert label.render(RenderContext(width=3)) == "he…"


def test_progress_bar_fill_is_proportional():
    bar = ProgressBar(position=30.0, duration=120.0)
    line = bar.render(RenderContext(width=40))
    assert line == " [" + "/" * 6 + " " * 18 + "] 00:30/02:00 "
    assert len(line) == 40


def test_progress_bar_reads_context_by_default():
    context = RenderContext(width=10, position=30.0, track=TRACK)
    assert ProgressBar(show_time=False).render(context) == " [//    ] "


def test_progress_bar_without_duration_shows_empty_bar():
    assert ProgressBar().render(RenderContext(width=20)) == " [    ] 00:00/00:00 "


def test_progress_bar_consumes_updates_only_when_tracking_its_own_position():
    detached = ProgressBar(position=0.0, duration=60.0)
    assert detached.handle_event(ProgressUpdate(15.0)) is EventResult.CONSUMED
    assert detached.position == 15.0
    assert detached.duration == 60.0

    following = ProgressBar()
    assert following.handle_event(ProgressUpdate(15.0)) is EventResult.IGNORED
    assert following.position is None


def test_progress_bar_never_fails_below_min_width():
    line = ProgressBar(position=30.0, duration=120.0).render(RenderContext(width=5))
    assert cell_len(line) == 5
    assert ProgressBar().render(RenderContext(width=0)) == ""


def test_volume_bar_renders_level_and_percentage():
    context = RenderContext(width=27, volume=0.5)
    assert VolumeBar().render(context) == " volume: [/////     ]  50% "
    assert VolumeBar(show_percentage=False).render(context.with_width(22)) == " volume: [/////     ] "


def test_volume_bar_clamps_out_of_range_volume():
    line = VolumeBar().render(RenderContext(width=27, volume=1.7))
    assert line == " volume: [//////////] 100% "


def test_status_bar_shows_track_and_bookmark():
    context = RenderContext(width=30, playback_state=PlaybackState.PLAYING, track=TRACK, bookmarked=True)
    assert StatusBar().render(context) == fit("playing *Test Track", 30)
    assert StatusBar(show_bookmark=False).render(context) == fit("playing Test Track", 30)


def test_status_bar_truncates_long_names():
    context = RenderContext(width=10, playback_state=PlaybackState.PAUSED, track=TRACK)
    assert StatusBar().render(context) == "paused Te…"


def test_status_bar_without_track_shows_state_only():
    context = RenderContext(width=12, playback_state=PlaybackState.STOPPED, track=TRACK)
    assert StatusBar().render(context) == "stopped     "


def test_status_bar_spinner_advances_only_on_tick():
    status = StatusBar()
    context = RenderContext(width=12, playback_state=PlaybackState.BUFFERING)

    first = status.render(context)
    assert first.startswith("buffering ⠋")
    assert status.render(context) == first

    status.tick()
    assert status.render(context).startswith("buffering ⠙")

    for _ in range(len(StatusBar.SPINNER) - 1):
        status.tick()
    assert status.frame == 0


def test_control_bar_spreads_hints():
    line = ControlBar().render(RenderContext(width=40))
    assert line == "[s]kip" + " " * 10 + "[p]ause" + " " * 10 + "[q]uit "
    assert ControlBar().min_width() == 21


def test_control_bar_with_single_control():
    bar = ControlBar([("[q]", "uit")])
    assert bar.render(RenderContext(width=10)) == "[q]uit    "
    assert bar.min_width() == 6


def test_bitrate_readout():
    assert BitrateReadout().render(RenderContext(width=8, bitrate_kbps=320)) == "320 kbps"
    assert BitrateReadout().render(RenderContext(width=8)) == "-- kbps "
    assert BitrateReadout.expand is False
