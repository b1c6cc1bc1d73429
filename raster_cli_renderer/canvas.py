#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/canvas.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#


class Canvas:
    """
    In-memory character grid implementing the surface contract:
    clear(), draw(row, col, palette_index), present().

    ``cells`` holds the palette index drawn at each position (None when the
    cell is empty). Used headless and as the reference surface in tests.
    """
    __slots__ = ['width', 'height', 'cells', 'frames_presented', 'glyph']

    def __init__(self, height: int, width: int, glyph: str = 'X'):
        self.width, self.height = width, height
        self.glyph = glyph
        self.cells = [[None] * width for _ in range(height)]
        self.frames_presented = 0

    def clear(self):
        for row in self.cells:
            row[:] = [None] * self.width

    def draw(self, row: int, col: int, palette_index: int):
        if row < 0 or row >= self.height or col < 0 or col >= self.width:
            raise IndexError(f"cell ({row}, {col}) outside {self.height}x{self.width} canvas")
        self.cells[row][col] = palette_index

    def present(self):
        self.frames_presented += 1

    def get(self, row: int, col: int):
        return self.cells[row][col]

    def covered(self):
        """Set of (row, col) cells drawn since the last clear()."""
        return {(r, c) for r, row in enumerate(self.cells)
                for c, idx in enumerate(row) if idx is not None}

    def to_text(self, empty: str = ' ') -> str:
        """Render the grid as text, one line per row."""
        return "\n".join(
            "".join(self.glyph if idx is not None else empty for idx in row)
            for row in self.cells)
