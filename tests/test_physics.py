import math
import unittest

from raster_cli_renderer.math_utils import Mat4, Vec3
from raster_cli_renderer.physics import Inertial


class InertialTests(unittest.TestCase):
    def test_impulse_is_felt_on_the_next_step(self) -> None:
        body = Inertial()
        first = body.update(delta_velocity=Vec3(1.0, 0.0, 0.0))
        self.assertTrue(first.almost_equal(Mat4.identity()))
        second = body.update()
        self.assertTrue(second.translation_part().is_close((1.0, 0.0, 0.0)))

    def test_friction_applied_before_delta(self) -> None:
        body = Inertial(pos_friction=0.5, ang_friction=0.25,
                        velocity=(4.0, 0.0, 0.0), angular_velocity=(0.0, 0.0, 8.0))
        body.update(delta_velocity=(1.0, 0.0, 0.0), delta_angular_velocity=(0.0, 1.0, 0.0))
        self.assertTrue(body.velocity.is_close((3.0, 0.0, 0.0)))
        self.assertTrue(body.angular_velocity.is_close((0.0, 1.0, 2.0)))

    def test_angular_velocity_becomes_angle_axis(self) -> None:
        body = Inertial(angular_velocity=(0.0, 0.0, math.pi / 2))
        pose = body.update()
        self.assertTrue(pose.mul_vec3(Vec3(1.0, 0.0, 0.0)).is_close((0.0, 1.0, 0.0), 1e-12))

    def test_velocity_decays(self) -> None:
        body = Inertial(pos_friction=0.5, velocity=(8.0, 0.0, 0.0))
        steps = [body.update().translation_part().x for _ in range(4)]
        self.assertEqual(steps, [8.0, 4.0, 2.0, 1.0])

    def test_no_friction_keeps_velocity(self) -> None:
        body = Inertial(velocity=(0.0, 2.0, 0.0))
        for _ in range(3):
            body.update()
        self.assertTrue(body.velocity.is_close((0.0, 2.0, 0.0)))

    def test_friction_range(self) -> None:
        for bad in (0.0, -0.1, 1.5):
            with self.assertRaises(ValueError):
                Inertial(pos_friction=bad)
            with self.assertRaises(ValueError):
                Inertial(ang_friction=bad)


if __name__ == "__main__":
    unittest.main()
