"""Meshes of triangles or line-segment edges in indexed form."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from cloudview.geometry import Box3, EllipticalDist
from cloudview.mesh_util import bounding_box as _bounding_box
from cloudview.mesh_util import centroid as _centroid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickResult:
    """Vertex picked from a mesh by a distance function."""

    index: int
    position: tuple[float, float, float]
    distance: float
    info: str | None = None


class EdgeChainBuilder:
    """Collect edge chains, read one index at a time, as pairs of vertex indices.

    Each chain of ``n`` vertex indices becomes ``n - 1`` line segments so
    that the result can be drawn as separate lines.
    """

    def __init__(self, nvertices: int):
        self.nvertices = nvertices
        self.edges: list[int] = []
        self._prev = -1

    def add(self, length: int, index: int, vertex_index: int) -> bool:
        """Add element ``index`` of a chain of ``length`` indices.

        A negative ``index`` denotes the chain length itself and is ignored.
        Returns False if the index was ignored or rejected as out of range.
        """
        if index < 0:
            return False
        if not 0 <= vertex_index < self.nvertices:
            logger.warning(
                "Vertex index %d outside of valid range [0,%d] - ignoring edge",
                vertex_index,
                self.nvertices - 1,
            )
            self._prev = -1
            return False
        if self._prev != -1:
            self.edges.extend((self._prev, vertex_index))
        self._prev = vertex_index if index < length - 1 else -1
        return True


def _float_array(values: Sequence[float] | None) -> np.ndarray:
    if values is None:
        return np.zeros(0, dtype=np.float32)
    return np.asarray(values, dtype=np.float32).reshape(-1)


def _index_array(values: Sequence[int] | None) -> np.ndarray:
    if values is None:
        return np.zeros(0, dtype=np.uint32)
    arr = np.asarray(values, dtype=np.int64).reshape(-1)
    if arr.size and arr.min() < 0:
        raise ValueError("mesh indices must be non-negative")
    return arr.astype(np.uint32)


@dataclass
class TriMesh:
    """Vertices relative to ``offset`` with optional per-vertex attributes.

    Per-vertex colours, normals and texture coordinates whose length does not
    match the vertex count are dropped.
    """

    verts: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    colors: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    normals: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    texcoords: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    triangles: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.uint32))
    edges: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.uint32))
    file_name: str = ""
    texture_file_name: str = ""

    def __post_init__(self) -> None:
        self.verts = _float_array(self.verts)
        if self.verts.size % 3 != 0:
            raise ValueError("vertex array must hold xyz triples")
        x, y, z = self.offset
        self.offset = (float(x), float(y), float(z))
        nverts = self.verts.size // 3
        self.colors = _float_array(self.colors)
        self.normals = _float_array(self.normals)
        self.texcoords = _float_array(self.texcoords)
        if self.colors.size != 3 * nverts:
            self.colors = np.zeros(0, dtype=np.float32)
        if self.normals.size != 3 * nverts:
            self.normals = np.zeros(0, dtype=np.float32)
        if self.texcoords.size != 2 * nverts:
            self.texcoords = np.zeros(0, dtype=np.float32)
        self.triangles = _index_array(self.triangles)
        self.edges = _index_array(self.edges)

    def centroid(self) -> tuple[float, float, float]:
        """Mean vertex position in absolute coordinates."""
        return _centroid(self.offset, self.verts)

    def bounding_box(self) -> Box3:
        """Bounding box of the vertices in absolute coordinates."""
        return _bounding_box(self.offset, self.verts)

    def pick_vertex(self, dist_func: EllipticalDist, with_info: bool = False) -> PickResult | None:
        """Find the vertex nearest under ``dist_func``; None for an empty mesh."""
        if self.verts.size == 0:
            return None
        points = self.verts.reshape(-1, 3)
        idx, distance = dist_func.find_nearest(self.offset, points)
        if idx is None:
            return None
        px, py, pz = (float(c) + o for c, o in zip(points[idx], self.offset))
        info = None
        if with_info:
            info = f"  position = {px:.3f} {py:.3f} {pz:.3f}\n"
            if self.colors.size:
                r, g, b = (float(c) for c in self.colors[3 * idx : 3 * idx + 3])
                info += f"  color = {r:.3f} {g:.3f} {b:.3f}\n"
        return PickResult(idx, (px, py, pz), distance, info)