"""Helpers for triangle meshes stored as flat vertex and index arrays."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from cloudview.geometry import Box3


def _points(verts: Sequence[float], dtype=np.float64) -> np.ndarray:
    arr = np.asarray(verts, dtype=np.float32)
    if arr.ndim != 1 or arr.size % 3 != 0:
        raise ValueError("vertex array must be a flat sequence of xyz triples")
    return arr.reshape(-1, 3).astype(dtype)


def _triangles(triangles: Sequence[int], nverts: int | None = None) -> np.ndarray:
    tri = np.asarray(triangles, dtype=np.int64)
    if tri.ndim != 1 or tri.size % 3 != 0:
        raise ValueError("triangle array must be a flat sequence of index triples")
    if nverts is not None and tri.size and (tri.min() < 0 or tri.max() >= nverts):
        raise IndexError("triangle index outside the vertex array")
    return tri.reshape(-1, 3)


def centroid(offset: Sequence[float], verts: Sequence[float]) -> tuple[float, float, float]:
    """Mean vertex position plus ``offset``; just ``offset`` when there are none."""
    pts = _points(verts)
    off = np.asarray(offset, dtype=np.float64)
    if off.shape != (3,):
        raise ValueError("offset must have three components")
    mean = pts.mean(axis=0) if len(pts) else np.zeros(3)
    x, y, z = mean + off
    return (float(x), float(y), float(z))


def bounding_box(offset: Sequence[float], verts: Sequence[float]) -> Box3:
    """Bounding box of the vertices shifted by ``offset``; empty if no vertices."""
    box = Box3.empty()
    for point in _points(verts):
        box.extend_by(point)
    if not box.is_empty():
        ox, oy, oz = (float(c) for c in offset)
        box.min = (box.min[0] + ox, box.min[1] + oy, box.min[2] + oz)
        box.max = (box.max[0] + ox, box.max[1] + oy, box.max[2] + oz)
    return box


def _normalize_rows(vectors: np.ndarray) -> np.ndarray:
    lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
    safe = np.where(lengths > 0, lengths, 1)
    return np.where(lengths > 0, vectors / safe, 0).astype(np.float32)


def make_smooth_normals(verts: Sequence[float], triangles: Sequence[int]) -> np.ndarray:
    """Per-vertex normals averaged over the faces touching each vertex.

    Returns a flat float32 array the same length as ``verts``.  Vertices on
    no face, or only on degenerate faces, get a zero normal.
    """
    pts = _points(verts, np.float32)
    tri = _triangles(triangles, len(pts))
    normals = np.zeros_like(pts)
    if len(tri):
        p1, p2, p3 = pts[tri[:, 0]], pts[tri[:, 1]], pts[tri[:, 2]]
        face_normals = _normalize_rows(np.cross(p1 - p2, p1 - p3))
        for corner in range(3):
            np.add.at(normals, tri[:, corner], face_normals)
    return _normalize_rows(normals).reshape(-1)


def make_edges(triangles: Sequence[int]) -> list[int]:
    """Unique edges of the triangles as a flat list of sorted index pairs."""
    pairs = set()
    for a, b, c in _triangles(triangles).tolist():
        for i1, i2 in ((a, b), (b, c), (c, a)):
            pairs.add((min(i1, i2), max(i1, i2)))
    return [index for pair in sorted(pairs) for index in pair]