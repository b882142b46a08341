"""Ready-made component trees for the player screen."""

from __future__ import annotations

from collections.abc import Sequence

from .components import (
    ControlBar,
    EqualizerPreset,
    HStack,
    LyricsDisplay,
    NetworkStatus,
    PlaylistView,
    ProgressBar,
    RenderContext,
    SpectrumAnalyzer,
    StatusBar,
    VolumeBar,
    VolumeFlash,
    VStack,
)
from .config import PlayerUIConfig
from .window import Window


def _progress_or_volume(flash_ticks: int) -> VolumeFlash:
    return VolumeFlash(
        {"progress": ProgressBar(), "volume": VolumeBar()},
        rest="progress",
        flash="volume",
        duration_ticks=flash_ticks,
        name="middle",
    )


def create_default_layout(minimalist: bool = False, flash_ticks: int = 10) -> VStack:
    """Status line, progress/volume line and, unless minimalist, control hints.

    The middle line shows the progress bar and switches to the volume bar
    for ``flash_ticks`` ticks whenever the volume changes.
    """
    layout = VStack([StatusBar(), _progress_or_volume(flash_ticks)])
    if not minimalist:
        layout.add_child(ControlBar())
    return layout


def create_advanced_layout(
    minimalist: bool = False,
    flash_ticks: int = 10,
    tracks: Sequence[str] = (),
    lyrics: Sequence[tuple[float, str]] = (),
) -> VStack:
    """Full screen with every optional widget, sections one blank line apart.

    From top to bottom: status with the network indicator, spectrum,
    progress/volume line, current lyric, playlist window and, unless
    minimalist, control hints next to the equalizer preset. Rows drop the
    indicator and the preset first when the window is narrow.
    """
    top = HStack([StatusBar(), NetworkStatus()], separator=" ")
    layout = VStack(
        [
            top,
            SpectrumAnalyzer(bars=20),
            _progress_or_volume(flash_ticks),
            LyricsDisplay(lyrics),
            PlaylistView(max_visible=3, tracks=tracks),
        ],
        spacing=1,
    )
    if not minimalist:
        layout.add_child(HStack([ControlBar(), EqualizerPreset()], separator=" "))
    return layout


def build_window(config: PlayerUIConfig, snapshot: RenderContext | None = None) -> Window:
    if config.layout == "advanced":
        root = create_advanced_layout(config.minimalist, config.volume_flash_ticks)
    else:
        root = create_default_layout(config.minimalist, config.volume_flash_ticks)
    return Window(root, config.frame_width, borderless=config.borderless, snapshot=snapshot)
