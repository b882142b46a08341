"""tonebox - composable terminal components for an audio player screen."""

from .components import Component, EventResult, RenderContext
from .config import PlayerUIConfig
from .layouts import build_window, create_default_layout
from .pipeline import EventPipeline
from .window import Window

__version__ = "0.1.0"
__all__ = [
    "Component",
    "EventPipeline",
    "EventResult",
    "PlayerUIConfig",
    "RenderContext",
    "Window",
    "build_window",
    "create_default_layout",
]
