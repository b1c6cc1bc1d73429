#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#


class RasterError(Exception):
    """Base class for renderer errors."""


class OutOfRangeError(RasterError, IndexError):
    """Mesh data references a vertex that does not exist, or color and
    vertex arrays disagree in length."""


class BehindCameraError(RasterError, ValueError):
    """A camera-space point has non-positive depth and cannot be projected."""

    def __init__(self, point):
        super().__init__(f"point {point!r} is not in front of the camera")
        self.point = point


class DegenerateTriangleError(RasterError, ValueError):
    """The projected triangle has zero signed area."""


class ParallelUpVectorError(RasterError, ValueError):
    """look_at() was given an up vector parallel to the viewing direction."""
