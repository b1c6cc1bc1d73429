import unittest

from raster_cli_renderer.color import (
    DEFAULT_PALETTE,
    Palette,
    hex_to_unit_rgb,
    linear_to_srgb,
    parse_hex_color,
    rgb_to_palette_index,
    srgb_to_linear,
)


class TransferFunctionTests(unittest.TestCase):
    def test_known_values(self) -> None:
        self.assertEqual(srgb_to_linear(0.0), 0.0)
        self.assertAlmostEqual(srgb_to_linear(1.0), 1.0)
        self.assertAlmostEqual(srgb_to_linear(0.5), 0.21404114, places=6)
        self.assertAlmostEqual(srgb_to_linear(0.04), 0.04 / 12.92)
        self.assertAlmostEqual(linear_to_srgb(0.002), 0.002 * 12.92)
        self.assertAlmostEqual(linear_to_srgb(1.0), 1.0)

    def test_round_trip(self) -> None:
        for i in range(101):
            c = i / 100.0
            self.assertAlmostEqual(linear_to_srgb(srgb_to_linear(c)), c, places=9)
            self.assertAlmostEqual(srgb_to_linear(linear_to_srgb(c)), c, places=9)

    def test_component_wise_on_triples(self) -> None:
        lin = srgb_to_linear((0.0, 0.5, 1.0))
        self.assertIsInstance(lin, tuple)
        self.assertEqual(len(lin), 3)
        self.assertAlmostEqual(lin[1], srgb_to_linear(0.5))
        back = linear_to_srgb(lin)
        for a, b in zip(back, (0.0, 0.5, 1.0)):
            self.assertAlmostEqual(a, b)


class PaletteTests(unittest.TestCase):
    def test_index_formula(self) -> None:
        self.assertEqual(rgb_to_palette_index((0, 0, 0)), 0)
        self.assertEqual(rgb_to_palette_index((1, 1, 1)), 215)
        self.assertEqual(rgb_to_palette_index((1, 0, 0)), 5 * 36)
        self.assertEqual(rgb_to_palette_index((0, 1, 0)), 5 * 6)
        self.assertEqual(rgb_to_palette_index((0, 0, 1)), 5)
        self.assertEqual(len(DEFAULT_PALETTE), 216)

    def test_perceptual_levels_square_first(self) -> None:
        self.assertEqual(DEFAULT_PALETTE.level(0.5), 1)    # 0.25 * 6
        self.assertEqual(DEFAULT_PALETTE.level(0.9), 4)    # 0.81 * 6
        self.assertEqual(DEFAULT_PALETTE.level(0.99), 5)

    def test_linear_levels(self) -> None:
        palette = Palette(6, perceptual=False)
        self.assertEqual(palette.level(0.5), 3)
        self.assertEqual(palette.level(0.1), 0)
        self.assertEqual(palette.level(1.0), 5)

    def test_channels_are_clamped(self) -> None:
        self.assertEqual(DEFAULT_PALETTE.level(-0.3), 0)
        self.assertEqual(DEFAULT_PALETTE.level(4.0), 5)
        self.assertEqual(rgb_to_palette_index((2.0, -1.0, 1.5)), 5 * 36 + 5)

    def test_representative_colors_requantize_to_themselves(self) -> None:
        for palette in (Palette(6, True), Palette(6, False), Palette(4, True)):
            for index in range(len(palette)):
                self.assertEqual(palette.index(palette.rgb(index)), index, (palette, index))

    def test_sqrt_level_table(self) -> None:
        levels = [round(DEFAULT_PALETTE.level_value(i) * 1000) for i in range(6)]
        self.assertEqual(levels, [0, 447, 632, 775, 894, 1000])

    def test_rgb_rejects_out_of_range_index(self) -> None:
        with self.assertRaises(IndexError):
            DEFAULT_PALETTE.rgb(216)

    def test_too_few_levels(self) -> None:
        with self.assertRaises(ValueError):
            Palette(1)


class HexColorTests(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertEqual(parse_hex_color("#FF8800"), (255, 136, 0))
        self.assertEqual(parse_hex_color("00ff00"), (0, 255, 0))
        self.assertIsNone(parse_hex_color("#FFF"))
        self.assertIsNone(parse_hex_color("#GGGGGG"))
        self.assertIsNone(parse_hex_color(None))

    def test_unit_rgb(self) -> None:
        self.assertEqual(hex_to_unit_rgb("#FF0000"), (1.0, 0.0, 0.0))
        self.assertIsNone(hex_to_unit_rgb("nope"))


if __name__ == "__main__":
    unittest.main()
