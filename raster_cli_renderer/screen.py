#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/screen.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses


class CursesCanvas:
    """
    Surface backed by a curses window.

    ``pairs`` maps palette indices to curses color pairs and comes from
    color.init_colors(), which must run once before the first frame.
    Output is staged with noutrefresh(); the caller flushes it with
    curses.doupdate() after drawing any overlay.
    """

    def __init__(self, window, pairs, glyph: str = 'X', show_border: bool = True,
                 use_color: bool = True):
        self.window = window
        self.pairs = pairs
        self.glyph = glyph
        self.show_border = show_border
        self.use_color = use_color

    @classmethod
    def create(cls, height: int, width: int, pairs, config, top: int = 0, left: int = 0):
        """Open a new window of the given size for rendering."""
        window = curses.newwin(height, width, top, left)
        return cls(window, pairs, glyph=config.glyph,
                   show_border=config.show_border, use_color=config.use_color)

    def clear(self):
        self.window.erase()
        if self.show_border:
            self.window.box()

    def draw(self, row: int, col: int, palette_index: int):
        attr = curses.color_pair(0)
        if self.use_color and palette_index < len(self.pairs):
            attr = curses.color_pair(self.pairs[palette_index])
        try:
            self.window.addch(row, col, self.glyph, attr)
        except curses.error:
            # addch raises after writing the bottom-right cell (cursor cannot advance)
            max_y, max_x = self.window.getmaxyx()
            if (row, col) != (max_y - 1, max_x - 1):
                raise

    def present(self):
        self.window.noutrefresh()
