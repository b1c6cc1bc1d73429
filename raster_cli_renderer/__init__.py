#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3, Mat4
from .errors import (RasterError, OutOfRangeError, BehindCameraError,
                     DegenerateTriangleError, ParallelUpVectorError)
from .color import (Palette, srgb_to_linear, linear_to_srgb, rgb_to_palette_index,
                    parse_hex_color, init_colors)
from .config import RenderConfig
from .canvas import Canvas
from .mesh import Face, Mesh, parse_mesh
from .camera import Camera, FrameStats
from .physics import Inertial
