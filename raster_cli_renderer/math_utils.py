#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math


class Vec3:
    """Immutable 3-component vector."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def of(cls, value) -> 'Vec3':
        """Coerce a Vec3 or any 3-sequence to a Vec3."""
        if isinstance(value, Vec3):
            return value
        x, y, z = value
        return cls(x, y, z)

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> 'Vec3':
        m = self.magnitude()
        if m == 0:
            return Vec3(0, 0, 0)
        return self / m

    def is_close(self, other, tol: float = 1e-9) -> bool:
        return (abs(self.x - other[0]) <= tol and
                abs(self.y - other[1]) <= tol and
                abs(self.z - other[2]) <= tol)


class Mat4:
    """4x4 matrix for rigid transforms, stored as [row][col].

    Points are column vectors, so ``a @ b`` applies ``b`` first. Only the
    rotation + translation subset is produced by the factories below, which is
    what ``rigid_inverse`` relies on.
    """
    __slots__ = ('m',)

    def __init__(self, data=None):
        if data:
            self.m = [[float(v) for v in row] for row in data]
        else:
            self.m = [[0.0] * 4 for _ in range(4)]

    @classmethod
    def identity(cls) -> 'Mat4':
        res = cls()
        for i in range(4):
            res.m[i][i] = 1.0
        return res

    @classmethod
    def translation(cls, x, y, z) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][3] = float(x)
        mat.m[1][3] = float(y)
        mat.m[2][3] = float(z)
        return mat

    @classmethod
    def angle_axis(cls, angle: float, axis) -> 'Mat4':
        """Rotation by ``angle`` radians about ``axis`` (Rodrigues' formula).

        A zero-length axis yields the identity.
        """
        k = Vec3.of(axis).normalize()
        if k.magnitude() == 0.0 or angle == 0.0:
            return cls.identity()
        c = math.cos(angle)
        s = math.sin(angle)
        t = 1.0 - c
        kx, ky, kz = k
        return cls.from_rotation_translation(
            [
                [c + t * kx * kx, t * kx * ky - s * kz, t * kx * kz + s * ky],
                [t * ky * kx + s * kz, c + t * ky * ky, t * ky * kz - s * kx],
                [t * kz * kx - s * ky, t * kz * ky + s * kx, c + t * kz * kz],
            ],
            (0.0, 0.0, 0.0),
        )

    @classmethod
    def from_rotation_translation(cls, rot, trans) -> 'Mat4':
        """Build from a 3x3 rotation (rows) and a translation 3-vector."""
        mat = cls.identity()
        for r in range(3):
            for c in range(3):
                mat.m[r][c] = float(rot[r][c])
            mat.m[r][3] = float(trans[r])
        return mat

    @classmethod
    def from_basis(cls, x_axis, y_axis, z_axis, origin) -> 'Mat4':
        """Frame whose local x/y/z axes map to the given world directions."""
        cols = (Vec3.of(x_axis), Vec3.of(y_axis), Vec3.of(z_axis))
        rot = [[cols[c][r] for c in range(3)] for r in range(3)]
        return cls.from_rotation_translation(rot, Vec3.of(origin))

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            res = Mat4()
            for r in range(4):
                for c in range(4):
                    val = 0.0
                    for k in range(4):
                        val += self.m[r][k] * other.m[k][c]
                    res.m[r][c] = val
            return res
        return NotImplemented

    def __repr__(self):
        rows = ", ".join("[" + ", ".join(f"{v:.3f}" for v in row) + "]" for row in self.m)
        return f"Mat4([{rows}])"

    def copy(self) -> 'Mat4':
        return Mat4(self.m)

    def mul_vec3(self, v: Vec3) -> Vec3:
        """Transform a point (w=1)."""
        m = self.m
        x = m[0][0]*v.x + m[0][1]*v.y + m[0][2]*v.z + m[0][3]
        y = m[1][0]*v.x + m[1][1]*v.y + m[1][2]*v.z + m[1][3]
        z = m[2][0]*v.x + m[2][1]*v.y + m[2][2]*v.z + m[2][3]
        return Vec3(x, y, z)

    def translation_part(self) -> Vec3:
        return Vec3(self.m[0][3], self.m[1][3], self.m[2][3])

    def column(self, index: int) -> Vec3:
        return Vec3(self.m[0][index], self.m[1][index], self.m[2][index])

    def rigid_inverse(self) -> 'Mat4':
        """Inverse of a rotation + translation: (R^T, -R^T t)."""
        rot_t = [[self.m[c][r] for c in range(3)] for r in range(3)]
        t = self.translation_part()
        inv_t = [-(rot_t[r][0] * t.x + rot_t[r][1] * t.y + rot_t[r][2] * t.z)
                 for r in range(3)]
        return Mat4.from_rotation_translation(rot_t, inv_t)

    def almost_equal(self, other: 'Mat4', tol: float = 1e-9) -> bool:
        return all(abs(self.m[r][c] - other.m[r][c]) <= tol
                   for r in range(4) for c in range(4))
