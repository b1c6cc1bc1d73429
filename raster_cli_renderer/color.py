#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging
import math

logger = logging.getLogger(__name__)

# Offsets so the palette does not overwrite the terminal's default colors
# (0-7) or the default color pair (0).
COLOR_ENCODING_OFFSET = 8
PAIR_ENCODING_OFFSET = 1


def _srgb_to_linear(value: float) -> float:
    if value <= 0.04045:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(value: float) -> float:
    if value <= 0.0031308:
        return value * 12.92
    return value ** (1 / 2.4) * 1.055 - 0.055


def srgb_to_linear(c):
    """Convert an sRGB value (scalar or 3-sequence) to linear light."""
    if isinstance(c, (int, float)):
        return _srgb_to_linear(c)
    return tuple(_srgb_to_linear(v) for v in c)


def linear_to_srgb(c):
    """Convert a linear-light value (scalar or 3-sequence) to sRGB."""
    if isinstance(c, (int, float)):
        return _linear_to_srgb(c)
    return tuple(_linear_to_srgb(v) for v in c)


class Palette:
    """
    A levels x levels x levels RGB cube.

    Each channel is mapped to one of ``levels`` discrete levels and the three
    levels are encoded as ``(r * levels + g) * levels + b``. With
    ``perceptual=True`` the levels follow a sqrt distribution, so more of
    them sit near full brightness (for 6 levels: 0, .447, .632, .775, .894,
    1); the input is squared before flooring to match.
    """
    __slots__ = ('levels', 'perceptual')

    def __init__(self, levels: int = 6, perceptual: bool = True):
        if levels < 2:
            raise ValueError(f"palette needs at least 2 levels, got {levels}")
        self.levels = levels
        self.perceptual = perceptual

    def __repr__(self):
        return f"Palette(levels={self.levels}, perceptual={self.perceptual})"

    def __len__(self):
        return self.levels ** 3

    def level(self, value: float) -> int:
        """Quantize one channel in [0, 1] to a level index."""
        value = min(1.0, max(0.0, float(value)))
        if self.perceptual:
            value = value * value
        return min(self.levels - 1, max(0, int(math.floor(value * self.levels))))

    def level_value(self, level: int) -> float:
        """Representative channel intensity of a level, in [0, 1]."""
        t = level / (self.levels - 1)
        return math.sqrt(t) if self.perceptual else t

    def index(self, rgb) -> int:
        r, g, b = rgb
        n = self.levels
        return (self.level(r) * n + self.level(g)) * n + self.level(b)

    def rgb(self, index: int):
        """Representative (r, g, b) color of a palette index."""
        n = self.levels
        if not 0 <= index < len(self):
            raise IndexError(f"palette index {index} out of range [0, {len(self)})")
        r, rem = divmod(index, n * n)
        g, b = divmod(rem, n)
        return (self.level_value(r), self.level_value(g), self.level_value(b))


DEFAULT_PALETTE = Palette()


def rgb_to_palette_index(c, palette: Palette = DEFAULT_PALETTE) -> int:
    """Map an sRGB color in [0, 1]^3 to its palette index."""
    return palette.index(c)


def parse_hex_color(hex_str):
    """
    Parse a hex color string to an (r, g, b) tuple.
    Accepts: '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns: (r, g, b) tuple with values 0-255, or None on failure.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
        return (r, g, b)
    except ValueError:
        return None


def hex_to_unit_rgb(hex_str):
    """Like parse_hex_color, but with channels scaled to [0, 1]."""
    rgb = parse_hex_color(hex_str)
    if rgb is None:
        return None
    return tuple(v / 255.0 for v in rgb)


# --- terminal fallbacks when palette slots cannot be redefined ---

# The xterm-256 6x6x6 color cube occupies indices 16-231.
# Each axis has values: 0, 95, 135, 175, 215, 255
_CUBE_VALUES = [0, 95, 135, 175, 215, 255]

# ANSI 0-7 approximate RGB values
_ANSI8 = [
    (0, 0, 0),       # 0  black
    (128, 0, 0),     # 1  red
    (0, 128, 0),     # 2  green
    (128, 128, 0),   # 3  yellow
    (0, 0, 128),     # 4  blue
    (128, 0, 128),   # 5  magenta
    (0, 128, 128),   # 6  cyan
    (192, 192, 192), # 7  white
]


def _rgb_to_nearest_xterm(r, g, b):
    """Find the nearest xterm-256 index for an (r, g, b) color.
    Searches the 6x6x6 cube and the grayscale ramp for best match."""

    def _nearest_cube_val(v):
        return min(range(6), key=lambda i: abs(v - _CUBE_VALUES[i]))

    ri = _nearest_cube_val(r)
    gi = _nearest_cube_val(g)
    bi = _nearest_cube_val(b)
    cube_idx = 16 + ri * 36 + gi * 6 + bi
    cr, cg, cb = _CUBE_VALUES[ri], _CUBE_VALUES[gi], _CUBE_VALUES[bi]
    cube_dist = (r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2

    # Grayscale ramp: indices 232-255, values 8, 18, ..., 238
    gray_avg = (r + g + b) // 3
    gray_step = max(0, min(23, (gray_avg - 8 + 5) // 10))
    gv = 8 + gray_step * 10
    gray_dist = (r - gv) ** 2 + (g - gv) ** 2 + (b - gv) ** 2

    return 232 + gray_step if gray_dist < cube_dist else cube_idx


def _rgb_to_nearest_ansi8(r, g, b):
    """Find the nearest basic ANSI color index (0-7) for an (r, g, b) color."""
    return min(range(8), key=lambda i: (r - _ANSI8[i][0]) ** 2 +
                                       (g - _ANSI8[i][1]) ** 2 +
                                       (b - _ANSI8[i][2]) ** 2)


def init_colors(palette: Palette = DEFAULT_PALETTE, use_color: bool = True):
    """
    Register the palette with curses. Call once after curses.wrapper init;
    the result stays valid for the lifetime of the process.

    Color mode cascade:
      1. True color  - can_change_color(): init_color() with exact RGB
      2. xterm-256   - 256+ colors: nearest xterm-256 index
      3. 8-color     - basic ANSI palette approximation
      4. Mono        - no color
    Returns a list mapping each palette index to a curses color pair id
    (0, the terminal default pair, when the index could not be registered).
    """
    size = len(palette)
    if not use_color or not curses.has_colors():
        return [0] * size

    curses.start_color()
    try:
        curses.use_default_colors()
    except curses.error:
        logger.debug("terminal has no default colors")

    num_colors = curses.COLORS
    num_pairs = curses.COLOR_PAIRS
    can_redefine = curses.can_change_color()

    rgb255 = [tuple(int(round(v * 255)) for v in palette.rgb(i)) for i in range(size)]

    if can_redefine and num_colors >= COLOR_ENCODING_OFFSET + size:
        mode = "true-color"
        slots = []
        for i in range(size):
            slot = COLOR_ENCODING_OFFSET + i
            r, g, b = (int(round(v * 1000)) for v in palette.rgb(i))
            curses.init_color(slot, r, g, b)
            slots.append(slot)
    elif num_colors >= 256:
        mode = "xterm-256"
        slots = [_rgb_to_nearest_xterm(*rgb) for rgb in rgb255]
    elif num_colors >= 8:
        mode = "ansi-8"
        slots = [_rgb_to_nearest_ansi8(*rgb) for rgb in rgb255]
    else:
        logger.info("terminal reports %d colors, rendering monochrome", num_colors)
        return [0] * size

    pairs = []
    for i, slot in enumerate(slots):
        pair_id = i + PAIR_ENCODING_OFFSET
        if pair_id >= num_pairs:
            pairs.append(0)
            continue
        # fg == bg, so each cell is a solid block of the palette color
        curses.init_pair(pair_id, slot, slot)
        pairs.append(pair_id)

    logger.info("initialized %d palette colors (%s, %d terminal colors)",
                size, mode, num_colors)
    return pairs
