import unittest
from unittest import mock

from raster_cli_renderer import color
from raster_cli_renderer.color import Palette, init_colors
from raster_cli_renderer.screen import CursesCanvas


class _CursesError(Exception):
    pass


def _fake_curses(colors, pairs, can_change):
    return mock.patch.multiple(
        color.curses,
        has_colors=mock.DEFAULT,
        start_color=mock.DEFAULT,
        use_default_colors=mock.DEFAULT,
        can_change_color=mock.Mock(return_value=can_change),
        init_color=mock.DEFAULT,
        init_pair=mock.DEFAULT,
        COLORS=colors,
        COLOR_PAIRS=pairs,
        create=True,
    )


class InitColorsTests(unittest.TestCase):
    def test_true_color_defines_every_index(self) -> None:
        with _fake_curses(256, 256, True) as fake:
            fake["has_colors"].return_value = True
            pairs = init_colors(Palette())
        self.assertEqual(pairs, list(range(1, 217)))
        self.assertEqual(fake["init_color"].call_count, 216)
        fake["init_color"].assert_any_call(8 + 215, 1000, 1000, 1000)
        fake["init_color"].assert_any_call(8 + 36, 447, 0, 0)
        fake["init_pair"].assert_any_call(1, 8, 8)

    def test_xterm_fallback(self) -> None:
        with _fake_curses(256, 256, False) as fake:
            fake["has_colors"].return_value = True
            pairs = init_colors(Palette())
        self.assertEqual(len(pairs), 216)
        fake["init_color"].assert_not_called()
        fake["init_pair"].assert_any_call(1, 16, 16)      # black -> cube origin
        fake["init_pair"].assert_any_call(216, 231, 231)  # white -> cube corner

    def test_limited_pairs_fall_back_to_default(self) -> None:
        with _fake_curses(8, 64, False) as fake:
            fake["has_colors"].return_value = True
            pairs = init_colors(Palette())
        self.assertEqual(pairs[:63], list(range(1, 64)))
        self.assertEqual(set(pairs[63:]), {0})

    def test_monochrome(self) -> None:
        with _fake_curses(256, 256, True) as fake:
            fake["has_colors"].return_value = False
            self.assertEqual(init_colors(Palette()), [0] * 216)
            self.assertEqual(init_colors(Palette(), use_color=False), [0] * 216)
        fake["start_color"].assert_not_called()


class CursesCanvasTests(unittest.TestCase):
    def setUp(self) -> None:
        self.window = mock.Mock()
        self.canvas = CursesCanvas(self.window, pairs=[3, 4, 5], glyph='#')

    def test_surface_contract(self) -> None:
        with mock.patch("raster_cli_renderer.screen.curses.color_pair", side_effect=lambda n: n * 256):
            self.canvas.clear()
            self.canvas.draw(2, 3, 1)
            self.canvas.present()
        self.window.erase.assert_called_once_with()
        self.window.box.assert_called_once_with()
        self.window.addch.assert_called_once_with(2, 3, '#', 4 * 256)
        self.window.noutrefresh.assert_called_once_with()

    def test_monochrome_uses_default_pair(self) -> None:
        self.canvas.use_color = False
        with mock.patch("raster_cli_renderer.screen.curses.color_pair", side_effect=lambda n: n * 256):
            self.canvas.draw(0, 0, 2)
        self.window.addch.assert_called_once_with(0, 0, '#', 0)

    def test_bottom_right_cell_error_is_ignored(self) -> None:
        self.window.getmaxyx.return_value = (4, 6)
        with mock.patch.multiple("raster_cli_renderer.screen.curses",
                                 color_pair=mock.Mock(return_value=0),
                                 error=_CursesError):
            self.window.addch.side_effect = _CursesError()
            self.canvas.draw(3, 5, 0)
            with self.assertRaises(_CursesError):
                self.canvas.draw(1, 2, 0)


if __name__ == "__main__":
    unittest.main()
