"""Component tree for the tonebox player screen.

Provides the component contract, leaf widgets, stack containers and
dynamic (variant-switching) components, along with the render context and
event types that flow through a tree.
"""

from .base import Component, crop, fit
from .context import PlaybackState, RenderContext, TrackInfo
from .dynamic import DynamicComponent, VolumeFlash
from .events import (
    BookmarkChanged,
    ComponentEvent,
    Custom,
    EventResult,
    PlaybackStateChanged,
    ProgressUpdate,
    Resize,
    SwitchVariant,
    Tick,
    TrackChanged,
    VolumeChanged,
)
from .extras import (
    ConnectionStatus,
    EqualizerPreset,
    LyricsDisplay,
    NetworkStatus,
    PlaylistView,
    SpectrumAnalyzer,
)
from .layout import Container, HStack, VStack, allocate_widths
from .widgets import BitrateReadout, ControlBar, Label, ProgressBar, StatusBar, VolumeBar, format_duration

__all__ = [
    # Contract
    "Component",
    "fit",
    "crop",
    # Context
    "PlaybackState",
    "RenderContext",
    "TrackInfo",
    # Events
    "BookmarkChanged",
    "ComponentEvent",
    "Custom",
    "EventResult",
    "PlaybackStateChanged",
    "ProgressUpdate",
    "Resize",
    "SwitchVariant",
    "Tick",
    "TrackChanged",
    "VolumeChanged",
    # Containers
    "Container",
    "HStack",
    "VStack",
    "allocate_widths",
    "DynamicComponent",
    "VolumeFlash",
    # Widgets
    "BitrateReadout",
    "ControlBar",
    "Label",
    "ProgressBar",
    "StatusBar",
    "VolumeBar",
    "format_duration",
    "ConnectionStatus",
    "EqualizerPreset",
    "LyricsDisplay",
    "NetworkStatus",
    "PlaylistView",
    "SpectrumAnalyzer",
]
