#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
import math
from typing import NamedTuple, Optional

from .color import linear_to_srgb, srgb_to_linear
from .config import RenderConfig
from .errors import BehindCameraError, ParallelUpVectorError
from .math_utils import Mat4, Vec3
from .mesh import Mesh
from .rasterizer import DepthBuffer, covered_pixels, perspective_color, perspective_depth

logger = logging.getLogger(__name__)

# Below this norm the up vector is treated as parallel to the view direction.
UP_EPSILON = 1e-6

WORLD_UP = Vec3(0.0, 0.0, 1.0)


class FrameStats(NamedTuple):
    faces_drawn: int
    faces_skipped: int
    pixels_drawn: int


class Camera:
    """
    Pinhole camera that rasterizes a mesh onto a character-grid surface.

    Camera-space conventions:
      - "forward" is +z
      - "up" is -y (pixel rows grow downwards)
      - "right" is +x

    The pose is a rigid camera-to-world transform; its inverse is cached and
    only ever recomputed together with it, in _set_pose().
    """

    def __init__(self, height: int, width: int, horizontal_fov: float,
                 camera_to_world: Optional[Mat4] = None, surface=None,
                 config: Optional[RenderConfig] = None):
        if height <= 0 or width <= 0:
            raise ValueError(f"image size must be positive, got {height}x{width}")
        if not 0.0 < horizontal_fov < math.pi:
            raise ValueError(f"horizontal_fov must be in (0, pi), got {horizontal_fov}")

        self._height = int(height)
        self._width = int(width)
        self._fov = float(horizontal_fov)
        self._fx = (width / 2.0) * math.tan(horizontal_fov / 2.0)
        self._fy = height * self._fx / width
        self._cx = width / 2.0 - 0.5
        self._cy = height / 2.0 - 0.5

        self.surface = surface
        self.config = config if config is not None else RenderConfig()

        self._camera_to_world = None
        self._world_to_camera = None
        self._set_pose(camera_to_world if camera_to_world is not None else Mat4.identity())

    def __repr__(self):
        return (f"Camera({self._height}x{self._width}, fov={self._fov:.3f}, "
                f"position={self.position!r})")

    # -- intrinsics (read-only) ------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def horizontal_fov(self) -> float:
        return self._fov

    @property
    def fx(self) -> float:
        return self._fx

    @property
    def fy(self) -> float:
        return self._fy

    @property
    def cx(self) -> float:
        return self._cx

    @property
    def cy(self) -> float:
        return self._cy

    # -- extrinsics --------------------------------------------------------
    @property
    def camera_to_world(self) -> Mat4:
        return self._camera_to_world.copy()

    @property
    def world_to_camera(self) -> Mat4:
        return self._world_to_camera.copy()

    @property
    def position(self) -> Vec3:
        return self._camera_to_world.translation_part()

    @property
    def forward(self) -> Vec3:
        return self._camera_to_world.column(2)

    @property
    def right(self) -> Vec3:
        return self._camera_to_world.column(0)

    def _set_pose(self, camera_to_world: Mat4):
        self._camera_to_world = camera_to_world.copy()
        self._world_to_camera = camera_to_world.rigid_inverse()

    def transform(self, t: Mat4):
        """Move the camera by a rigid transform given in world coordinates."""
        self._set_pose(t @ self._camera_to_world)
        logger.debug("camera moved to %r", self.position)

    def look_at(self, target, world_up=WORLD_UP):
        """Rotate the camera in place so that it faces ``target``.

        Raises ParallelUpVectorError when ``world_up`` has no component
        perpendicular to the viewing direction.
        """
        position = self.position
        view = Vec3.of(target) - position
        if view.magnitude() < UP_EPSILON:
            raise ParallelUpVectorError("look_at target coincides with the camera position")
        forward = view.normalize()
        up = Vec3.of(world_up)
        up = up - forward * up.dot(forward)
        if up.magnitude() < UP_EPSILON:
            raise ParallelUpVectorError(
                f"world_up {tuple(world_up)} is parallel to the view direction {forward!r}")
        up = up.normalize()
        right = forward.cross(up)
        self._set_pose(Mat4.from_basis(right, -up, forward, position))
        logger.debug("camera at %r looking at %r", position, Vec3.of(target))

    # -- projection --------------------------------------------------------
    def project_point(self, v: Vec3):
        """Perspective-divide a camera-space point onto the z=1 image plane."""
        if v.z <= 0:
            raise BehindCameraError(v)
        return (v.x / v.z, v.y / v.z)

    def image_plane_to_pixel(self, p):
        """Image-plane point to pixel coordinates (x=col, y=row)."""
        return (self._fx * p[0] + self._cx, self._fy * p[1] + self._cy)

    # -- rendering ---------------------------------------------------------
    def render(self, mesh: Mesh, surface=None) -> FrameStats:
        """Rasterize every face of the mesh and present one frame."""
        surface = surface if surface is not None else self.surface
        if surface is None:
            raise ValueError("Camera.render() needs a surface")

        config = self.config
        palette = config.palette
        width, height = self._width, self._height
        w2c = self._world_to_camera
        z_buf = DepthBuffer(width, height) if config.use_zbuffer else None

        surface.clear()
        drawn = skipped = pixels = 0

        for face in mesh.faces():
            cam = [w2c.mul_vec3(v) for v in face.vertices]
            try:
                plane = [self.project_point(v) for v in cam]
            except BehindCameraError:
                # no clipping: the whole triangle waits until it is fully visible
                skipped += 1
                continue
            pix1, pix2, pix3 = (self.image_plane_to_pixel(p) for p in plane)
            depths = (cam[0].z, cam[1].z, cam[2].z)

            flat_index = None
            if not config.interpolate_colors or face.c1 == face.c2 == face.c3:
                flat_index = palette.index(face.color)
            else:
                linear = [srgb_to_linear(c) for c in face.colors]

            drawn += 1
            for row, col, weights in covered_pixels(pix1, pix2, pix3, width, height):
                if z_buf is not None:
                    z = perspective_depth(weights, depths)
                    if not z_buf.test_and_set(row, col, z):
                        continue
                if flat_index is not None:
                    index = flat_index
                else:
                    if z_buf is None:
                        z = perspective_depth(weights, depths)
                    color = perspective_color(weights, depths, linear, z)
                    index = palette.index(linear_to_srgb(color))
                surface.draw(row, col, index)
                pixels += 1

        surface.present()
        if skipped:
            logger.debug("skipped %d faces behind the camera", skipped)
        return FrameStats(drawn, skipped, pixels)
