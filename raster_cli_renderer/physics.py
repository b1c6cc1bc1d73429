#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/physics.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .math_utils import Mat4, Vec3

ZERO = Vec3(0.0, 0.0, 0.0)


class Inertial:
    """
    Velocity state of an object that coasts and slows down under friction.

    Friction is the fraction of velocity kept per step: 1.0 means no
    friction, values towards 0 stop the object quickly.
    """
    __slots__ = ('pos_friction', 'ang_friction', '_velocity', '_angular_velocity')

    def __init__(self, pos_friction: float = 1.0, ang_friction: float = 1.0,
                 velocity=None, angular_velocity=None):
        for name, value in (('pos_friction', pos_friction), ('ang_friction', ang_friction)):
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        self.pos_friction = float(pos_friction)
        self.ang_friction = float(ang_friction)
        self._velocity = Vec3.of(velocity) if velocity is not None else ZERO
        self._angular_velocity = Vec3.of(angular_velocity) if angular_velocity is not None else ZERO

    @property
    def velocity(self) -> Vec3:
        return self._velocity

    @property
    def angular_velocity(self) -> Vec3:
        return self._angular_velocity

    def update(self, delta_velocity=None, delta_angular_velocity=None) -> Mat4:
        """
        Step forward one unit of time.

        Returns the pose correction produced by the velocities held *before*
        this call: translation by the velocity, rotation by |w| radians about
        w. The deltas only take effect on the next step, after friction has
        been applied to the current velocities.
        """
        w = self._angular_velocity
        pose = Mat4.angle_axis(w.magnitude(), w)
        v = self._velocity
        pose.m[0][3], pose.m[1][3], pose.m[2][3] = v.x, v.y, v.z

        dv = Vec3.of(delta_velocity) if delta_velocity is not None else ZERO
        dw = Vec3.of(delta_angular_velocity) if delta_angular_velocity is not None else ZERO
        self._velocity = v * self.pos_friction + dv
        self._angular_velocity = w * self.ang_friction + dw
        return pose
