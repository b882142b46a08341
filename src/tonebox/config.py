"""
tonebox configuration - display settings for the player screen.

Settings are plain Pydantic models so they can be validated on load and
constructed directly in tests. Only display concerns live here; anything
about audio sources belongs to the player driving the screen.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field


class PlayerUIConfig(BaseModel):
    """
    Display configuration for a tonebox window.

    Attributes:
        width (int): Width factor from 0 to 32; the window body is
            ``21 + width * 2`` columns wide
        borderless (bool): Draw the screen without the box frame
        minimalist (bool): Leave out the control hint bar
        layout (str): "default" for the three-line screen, "advanced" for
            the screen with spectrum, lyrics, playlist and equalizer
        volume_flash_ticks (int): Ticks the volume bar stays up after a
            volume change
        tick_interval_s (float): Seconds between driver ticks
    """

    width: int = Field(default=3, ge=0, le=32, description="Width factor, see frame_width.")
    borderless: bool = Field(default=False, description="Render without borders.")
    minimalist: bool = Field(default=False, description="Hide the control hint bar.")
    layout: Literal["default", "advanced"] = Field(default="default", description="Component tree to show.")
    volume_flash_ticks: int = Field(default=10, ge=1, description="Ticks the volume bar stays visible after a change.")
    tick_interval_s: float = Field(default=0.1, gt=0.0, description="Seconds between driver ticks.")

    @property
    def frame_width(self) -> int:
        """Inner window width in terminal cells."""
        return 21 + min(self.width, 32) * 2

    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        key_to_config: tuple[str, ...] = ("Player",),
    ) -> "PlayerUIConfig":
        """
        Load a PlayerUIConfig from a YAML file.

        Parameters:
            path (str | Path): Path to the YAML file
            key_to_config (tuple[str, ...], optional): Keys leading to the
                player section in nested files. Defaults to ("Player",).

        Returns:
            PlayerUIConfig: Validated configuration

        Raises:
            OSError: If the file cannot be read
            KeyError: If a key in ``key_to_config`` is missing
            pydantic.ValidationError: If values fail validation

        Example:
            >>> # Player:
            >>> #   width: 8
            >>> #   borderless: true
            >>> config = PlayerUIConfig.from_yaml("tonebox.yaml")
        """
        path = Path(path)

        # Files saved by some Windows editors carry a BOM
        for encoding in ["utf-8", "utf-8-sig"]:
            try:
                data = yaml.safe_load(path.read_text(encoding=encoding))
                break
            except UnicodeDecodeError:
                if encoding == "utf-8-sig":
                    raise

        config = data or {}
        for key in key_to_config:
            config = config[key]

        return cls.model_validate(config or {})
