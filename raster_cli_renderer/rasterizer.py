#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
from typing import NamedTuple

from .errors import DegenerateTriangleError


class BoundingBox(NamedTuple):
    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def is_empty(self) -> bool:
        return self.min_row > self.max_row or self.min_col > self.max_col


def edge_function(p, a, b) -> float:
    """
    Cross product of a -> p and a -> b on the 2D plane.

    Positive when p is right of the line a -> b, zero on it, negative left
    of it. The magnitude is twice the area of triangle (a, b, p).
    """
    return (p[0] - a[0]) * (b[1] - a[1]) - (p[1] - a[1]) * (b[0] - a[0])


def bounding_box(p1, p2, p3, width: int, height: int) -> BoundingBox:
    """
    Tightest integer box around the pixel centers that can lie on or inside
    the triangle, clamped to the grid. May be empty.
    """
    min_x = min(p1[0], p2[0], p3[0])
    max_x = max(p1[0], p2[0], p3[0])
    min_y = min(p1[1], p2[1], p3[1])
    max_y = max(p1[1], p2[1], p3[1])
    return BoundingBox(
        min_row=max(0, math.ceil(min_y)),
        max_row=min(height - 1, math.floor(max_y)),
        min_col=max(0, math.ceil(min_x)),
        max_col=min(width - 1, math.floor(max_x)),
    )


def barycentric(q, p1, p2, p3):
    """
    Containment test and barycentric weights of q in triangle (p1, p2, p3).

    Returns (inside, (b1, b2, b3)). Points on an edge count as inside, and
    both windings are accepted. No top-left rule: a pixel center exactly on
    an edge shared by two triangles is inside both.
    """
    signed_area = edge_function(p1, p2, p3)
    if signed_area == 0:
        raise DegenerateTriangleError(f"triangle {p1}, {p2}, {p3} has zero area")

    edge_12 = edge_function(q, p1, p2)
    edge_23 = edge_function(q, p2, p3)
    edge_31 = edge_function(q, p3, p1)

    weights = (abs(edge_23 / signed_area),
               abs(edge_31 / signed_area),
               abs(edge_12 / signed_area))
    inside = ((edge_12 >= 0 and edge_23 >= 0 and edge_31 >= 0) or
              (edge_12 <= 0 and edge_23 <= 0 and edge_31 <= 0))
    return inside, weights


def covered_pixels(p1, p2, p3, width: int, height: int):
    """
    Yield (row, col, (b1, b2, b3)) for every pixel center on or inside the
    triangle. Pixel (row, col) has its center at x=col, y=row. Degenerate
    triangles cover nothing.
    """
    box = bounding_box(p1, p2, p3, width, height)
    if box.is_empty:
        return
    for row in range(box.min_row, box.max_row + 1):
        for col in range(box.min_col, box.max_col + 1):
            try:
                inside, weights = barycentric((col, row), p1, p2, p3)
            except DegenerateTriangleError:
                return
            if inside:
                yield row, col, weights


def perspective_depth(weights, depths) -> float:
    """Camera-space depth at a pixel: 1/z is linear in screen space."""
    b1, b2, b3 = weights
    z1, z2, z3 = depths
    return 1.0 / (b1 / z1 + b2 / z2 + b3 / z3)


def perspective_color(weights, depths, colors, z: float):
    """Interpolate per-vertex values with 1/z weighting, then undo the scale."""
    b1, b2, b3 = weights
    z1, z2, z3 = depths
    w1, w2, w3 = b1 / z1, b2 / z2, b3 / z3
    c1, c2, c3 = colors
    return tuple(z * (w1 * a + w2 * b + w3 * c) for a, b, c in zip(c1, c2, c3))


class DepthBuffer:
    """Per-frame nearest depth per pixel; None marks an empty pixel."""
    __slots__ = ('width', 'height', 'rows')

    def __init__(self, width: int, height: int):
        self.width, self.height = width, height
        self.rows = [[None] * width for _ in range(height)]

    def get(self, row: int, col: int):
        return self.rows[row][col]

    def test_and_set(self, row: int, col: int, z: float) -> bool:
        """Record z unless the pixel already holds a nearer depth."""
        row_buf = self.rows[row]
        prev = row_buf[col]
        if prev is not None and prev < z:
            return False
        row_buf[col] = z
        return True
