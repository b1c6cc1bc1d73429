import math
import unittest

from raster_cli_renderer.math_utils import Mat4, Vec3


class Vec3Tests(unittest.TestCase):
    def test_normalize_zero_is_safe(self) -> None:
        zero = Vec3(0.0, 0.0, 0.0).normalize()
        self.assertTrue(zero.is_close((0.0, 0.0, 0.0)))

    def test_normalize_unit_length(self) -> None:
        unit = Vec3(3.0, 0.0, 4.0).normalize()
        self.assertAlmostEqual(unit.magnitude(), 1.0)
        self.assertTrue(unit.is_close((0.6, 0.0, 0.8)))

    def test_cross_follows_right_hand_rule(self) -> None:
        z = Vec3(1, 0, 0).cross(Vec3(0, 1, 0))
        self.assertTrue(z.is_close((0, 0, 1)))

    def test_of_accepts_sequences(self) -> None:
        v = Vec3.of([1, 2, 3])
        self.assertEqual(tuple(v), (1.0, 2.0, 3.0))
        self.assertIs(Vec3.of(v), v)


class Mat4Tests(unittest.TestCase):
    def test_angle_axis_about_z(self) -> None:
        m = Mat4.angle_axis(0.7, (0, 0, 2))
        p = m.mul_vec3(Vec3(1, 0, 0))
        self.assertTrue(p.is_close((math.cos(0.7), math.sin(0.7), 0.0), 1e-12))
        self.assertTrue(m.mul_vec3(Vec3(0, 0, 1)).is_close((0, 0, 1), 1e-12))

    def test_angle_axis_quarter_turn_about_x(self) -> None:
        m = Mat4.angle_axis(math.pi / 2, (1, 0, 0))
        self.assertTrue(m.mul_vec3(Vec3(0, 1, 0)).is_close((0, 0, 1), 1e-12))
        self.assertTrue(m.translation_part().is_close((0, 0, 0)))

    def test_angle_axis_zero_is_identity(self) -> None:
        self.assertTrue(Mat4.angle_axis(0.0, (0, 0, 0)).almost_equal(Mat4.identity()))

    def test_rigid_inverse(self) -> None:
        pose = Mat4.translation(1.0, -2.0, 3.0) @ Mat4.angle_axis(1.1, (1, 2, 3))
        self.assertTrue((pose @ pose.rigid_inverse()).almost_equal(Mat4.identity(), 1e-12))
        self.assertTrue((pose.rigid_inverse() @ pose).almost_equal(Mat4.identity(), 1e-12))

    def test_composition_applies_right_operand_first(self) -> None:
        m = Mat4.translation(1, 0, 0) @ Mat4.angle_axis(math.pi / 2, (0, 0, 1))
        p = m.mul_vec3(Vec3(1, 0, 0))
        self.assertTrue(p.is_close((1, 1, 0), 1e-12))

    def test_from_basis_columns(self) -> None:
        m = Mat4.from_basis((0, 1, 0), (0, 0, -1), (-1, 0, 0), (2, 0, 0))
        self.assertTrue(m.column(0).is_close((0, 1, 0)))
        self.assertTrue(m.column(2).is_close((-1, 0, 0)))
        self.assertTrue(m.translation_part().is_close((2, 0, 0)))
        self.assertTrue(m.mul_vec3(Vec3(0, 0, 1)).is_close((1, 0, 0)))


if __name__ == "__main__":
    unittest.main()
