#
# PROJECT: raster-cli-renderer
# MODULE: raster_cli_renderer/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
from collections.abc import Sequence
from typing import NamedTuple

from .errors import OutOfRangeError
from .math_utils import Mat4, Vec3

logger = logging.getLogger(__name__)

WHITE = (1.0, 1.0, 1.0)


class Face(NamedTuple):
    """Resolved triangle: three world-space positions and their colors."""
    v1: Vec3
    v2: Vec3
    v3: Vec3
    c1: tuple
    c2: tuple
    c3: tuple

    @property
    def vertices(self):
        return (self.v1, self.v2, self.v3)

    @property
    def colors(self):
        return (self.c1, self.c2, self.c3)

    @property
    def color(self):
        """Flat color: the face color, or the mean of the vertex colors."""
        if self.c1 == self.c2 == self.c3:
            return self.c1
        return tuple((a + b + c) / 3.0 for a, b, c in zip(self.c1, self.c2, self.c3))


class FaceSequence(Sequence):
    """Read-only view resolving a mesh's index triples into Face values.

    Faces are built on access, so the view always reflects the mesh's
    current vertex positions and may be iterated any number of times.
    """
    __slots__ = ('_mesh',)

    def __init__(self, mesh: 'Mesh'):
        self._mesh = mesh

    def __len__(self):
        return len(self._mesh.indices)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        return self._mesh._resolve(index)

    def __iter__(self):
        for i in range(len(self)):
            yield self._mesh._resolve(i)


class Mesh:
    """
    Indexed triangle mesh.

    Vertices are stored once; faces are (i, j, k) triples into the vertex
    list. Colors are either per vertex (interpolated across each face) or
    per face (flat). Uncolored meshes are white.
    """

    def __init__(self, vertices, faces, colors=None, face_colors=None):
        if colors is not None and face_colors is not None:
            raise ValueError("give per-vertex colors or per-face colors, not both")

        self.vertices = [Vec3.of(v) for v in vertices]
        self.indices = []
        n = len(self.vertices)
        for fi, face in enumerate(faces):
            idx = tuple(int(i) for i in face)
            if len(idx) != 3:
                raise ValueError(f"face {fi} has {len(idx)} indices, expected 3")
            for i in idx:
                if i < 0 or i >= n:
                    raise OutOfRangeError(
                        f"face {fi} references vertex {i}, mesh has {n} vertices")
            self.indices.append(idx)

        if colors is not None and len(colors) != n:
            raise OutOfRangeError(
                f"{len(colors)} vertex colors given for {n} vertices")
        if face_colors is not None and len(face_colors) != len(self.indices):
            raise OutOfRangeError(
                f"{len(face_colors)} face colors given for {len(self.indices)} faces")

        self.colors = ([_rgb(c, f"vertex color {i}") for i, c in enumerate(colors)]
                       if colors is not None else None)
        self.face_colors = ([_rgb(c, f"face color {i}") for i, c in enumerate(face_colors)]
                            if face_colors is not None else None)

    def __repr__(self):
        return f"Mesh(vertices={self.vertex_count}, faces={self.face_count})"

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.indices)

    @property
    def has_face_colors(self) -> bool:
        return self.face_colors is not None

    def _resolve(self, index: int) -> Face:
        i, j, k = self.indices[index]
        verts = self.vertices
        if self.face_colors is not None:
            c = self.face_colors[index]
            return Face(verts[i], verts[j], verts[k], c, c, c)
        if self.colors is not None:
            cols = self.colors
            return Face(verts[i], verts[j], verts[k], cols[i], cols[j], cols[k])
        return Face(verts[i], verts[j], verts[k], WHITE, WHITE, WHITE)

    def faces(self) -> FaceSequence:
        return FaceSequence(self)

    def transform(self, rigid: Mat4):
        """Apply a rigid transform to every vertex in place."""
        self.vertices[:] = [rigid.mul_vec3(v) for v in self.vertices]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_file(cls, filename, index_base: int = 0, default_color=None) -> 'Mesh':
        """Load a mesh from the line-oriented ``v``/``f`` text format."""
        with open(filename, 'rb') as f:
            mesh = parse_mesh(_decoded_lines(f), index_base=index_base,
                              default_color=default_color)
        logger.info("loaded %s: %d vertices, %d faces",
                    filename, mesh.vertex_count, mesh.face_count)
        return mesh

    @classmethod
    def pyramid(cls) -> 'Mesh':
        """Square pyramid with one flat color per face; world up is +z."""
        vertices = [
            (0.0, 0.0, 0.8),
            (0.5, 0.0, -0.4),
            (0.0, 0.5, -0.4),
            (-0.5, 0.0, -0.4),
            (0.0, -0.5, -0.4),
        ]
        faces = [(0, 1, 2), (0, 2, 3), (0, 3, 4), (0, 4, 1), (1, 3, 2), (1, 4, 3)]
        face_colors = [
            (1.0, 0.0, 0.0),  # red
            (0.0, 1.0, 0.0),  # green
            (1.0, 1.0, 0.0),  # yellow
            (0.0, 0.0, 1.0),  # blue
            (1.0, 0.0, 1.0),  # magenta
            (0.0, 1.0, 1.0),  # cyan
        ]
        return cls(vertices, faces, face_colors=face_colors)

    @classmethod
    def cube(cls, size: float = 1.0) -> 'Mesh':
        """Cube centered at the origin, each corner colored by its position."""
        h = size / 2.0
        vertices = [
            (-h, -h, -h), (h, -h, -h), (h, h, -h), (-h, h, -h),
            (-h, -h, h), (h, -h, h), (h, h, h), (-h, h, h),
        ]
        colors = [tuple(1.0 if c > 0 else 0.0 for c in v) for v in vertices]
        quads = [
            (0, 3, 2, 1),  # bottom
            (4, 5, 6, 7),  # top
            (0, 1, 5, 4),  # front
            (2, 3, 7, 6),  # back
            (1, 2, 6, 5),  # right
            (3, 0, 4, 7),  # left
        ]
        faces = []
        for a, b, c, d in quads:
            faces.append((a, b, c))
            faces.append((a, c, d))
        return cls(vertices, faces, colors=colors)


def _decoded_lines(raw):
    for lineno, line in enumerate(raw, 1):
        try:
            yield line.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ValueError(f"line {lineno}: not valid UTF-8 ({e.reason})") from e


def _rgb(color, what: str) -> tuple:
    rgb = tuple(float(v) for v in color)
    if len(rgb) != 3:
        raise ValueError(f"{what} has {len(rgb)} channels, expected 3")
    return rgb


def parse_mesh(lines,index_base: int = 0, default_color=None) -> Mesh:
    """
    Parse the line-oriented mesh format.

    ``v x y z`` or ``v x y z r g b`` defines a vertex, ``f i j k`` a face.
    Face tokens may be OBJ-style ``i/t/n``; only the part before the first
    ``/`` is used. Indices are read relative to ``index_base`` and stored
    0-based. Blank lines, ``#`` comments and any other records are ignored.
    """
    vertices = []
    colors = []
    faces = []
    colored = None

    for lineno, line in enumerate(lines, 1):
        parts = line.split()
        if not parts:
            continue
        tag = parts[0]
        try:
            if tag == 'v':
                if len(parts) not in (4, 7):
                    raise ValueError(f"expected 3 or 6 values, got {len(parts) - 1}")
                has_color = len(parts) == 7
                if colored is None:
                    colored = has_color
                elif colored != has_color:
                    raise ValueError("mixed colored and uncolored vertices")
                vertices.append(tuple(float(x) for x in parts[1:4]))
                if has_color:
                    colors.append(tuple(float(x) for x in parts[4:7]))
            elif tag == 'f':
                if len(parts) != 4:
                    raise ValueError(f"expected 3 indices, got {len(parts) - 1}")
                faces.append(tuple(int(x.split('/')[0]) - index_base for x in parts[1:4]))
            else:
                logger.debug("line %d: ignoring %r record", lineno, tag)
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from e

    if colored:
        return Mesh(vertices, faces, colors=colors)
    fill = tuple(default_color) if default_color is not None else WHITE
    return Mesh(vertices, faces, colors=[fill] * len(vertices))
