#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import os
from dataclasses import dataclass

from .color import Palette


@dataclass
class RenderConfig:
    """Configuration for the rendering pipeline."""
    use_color: bool = True
    use_zbuffer: bool = True
    interpolate_colors: bool = True
    color_levels: int = 6
    perceptual_levels: bool = True
    glyph: str = 'X'
    show_border: bool = True

    def __post_init__(self):
        if len(self.glyph) != 1:
            raise ValueError(f"glyph must be a single character, got {self.glyph!r}")
        if self.color_levels < 2:
            raise ValueError(f"color_levels must be at least 2, got {self.color_levels}")

    @property
    def palette(self) -> Palette:
        return Palette(self.color_levels, self.perceptual_levels)

    @classmethod
    def detect_terminal(cls) -> 'RenderConfig':
        """
        Guess terminal capabilities from the TERM environment variable.
        Accurate color detection requires curses initialization, so this is
        a pre-init guess.
        """
        term = os.environ.get('TERM', '').lower()
        is_dumb = term in ('', 'dumb', 'unknown')
        return cls(use_color=not is_dumb)
