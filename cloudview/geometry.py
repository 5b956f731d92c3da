"""Vector geometry helpers: boxes, elliptical distances and polygon normals."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import Callable, MutableSequence, Sequence, Tuple, TypeVar

import numpy as np

Vec3 = Tuple[float, float, float]
T = TypeVar("T")

_INF = math.inf


def _vec(p: Sequence[float]) -> Vec3:
    x, y, z = p
    return (float(x), float(y), float(z))


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scaled(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _length(a: Vec3) -> float:
    return math.sqrt(_dot(a, a))


def _normalized(a: Vec3) -> Vec3:
    length = _length(a)
    if length == 0:
        return (0.0, 0.0, 0.0)
    return (a[0] / length, a[1] / length, a[2] / length)


def _fmt(v: Vec3) -> str:
    return "(" + " ".join(f"{c:g}" for c in v) + ")"


@dataclass
class Box3:
    """Axis-aligned 3D box; a default box is empty."""

    min: Vec3 = (_INF, _INF, _INF)
    max: Vec3 = (-_INF, -_INF, -_INF)

    def __post_init__(self) -> None:
        self.min = _vec(self.min)
        self.max = _vec(self.max)

    @classmethod
    def empty(cls) -> Box3:
        return cls()

    def center(self) -> Vec3:
        return tuple((lo + hi) / 2 for lo, hi in zip(self.min, self.max))  # type: ignore[return-value]

    def is_empty(self) -> bool:
        return any(hi < lo for lo, hi in zip(self.min, self.max))

    def extend_by(self, point: Sequence[float]) -> None:
        """Grow the box so that it holds ``point``."""
        p = _vec(point)
        self.min = tuple(min(a, b) for a, b in zip(self.min, p))  # type: ignore[assignment]
        self.max = tuple(max(a, b) for a, b in zip(self.max, p))  # type: ignore[assignment]

    def contains(self, other: Box3) -> bool:
        """True if this box contains ``other`` entirely."""
        return all(
            omin >= smin and omax <= smax
            for smin, smax, omin, omax in zip(self.min, self.max, other.min, other.max)
        )

    def __str__(self) -> str:
        return f"{_fmt(self.min)}--{_fmt(self.max)}"


def make_bounding_cylinder(box: Box3, axis: Sequence[float]) -> tuple[float, float, float]:
    """Enclose ``box`` in a cylinder along the unit vector ``axis``.

    Returns ``(dmin, dmax, radius)``, where the axial extent is measured as
    ``axis . x`` and the cylinder axis passes through the box centre.
    """
    axis = _vec(axis)
    if abs(_length(axis) - 1) >= 1e-15:
        raise ValueError("cylinder axis must be normalized")
    center = box.center()
    half_length = -math.inf
    cradius2 = 0.0
    for x, y, z in itertools.product(*zip(box.min, box.max)):
        v = _sub((x, y, z), center)
        d = _dot(axis, v)
        half_length = max(half_length, d)
        cradius2 = max(cradius2, _dot(v, v) - d * d)
    radius = math.sqrt(cradius2)
    dc = _dot(axis, center)
    return dc - half_length, dc + half_length, radius


@dataclass(frozen=True)
class EllipticalDist:
    """Euclidean distance from ``origin`` with space scaled by ``scale`` along ``axis``.

    For axis (1,0,0) and scale 0.1 the distance is sqrt(0.01*x*x + y*y + z*z).
    """

    origin: Vec3
    axis: Vec3
    scale: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _vec(self.origin))
        object.__setattr__(self, "axis", _normalized(_vec(self.axis)))
        object.__setattr__(self, "scale", float(self.scale))

    def find_nearest(
        self, offset: Sequence[float], points: Sequence[Sequence[float]]
    ) -> tuple[int | None, float]:
        """Return ``(index, distance)`` of the point nearest the origin.

        True positions are ``points[i] + offset``; points are held in single
        precision.  With no points the result is ``(None, inf)``.
        """
        pts = np.asarray(points, dtype=np.float32).reshape(-1, 3)
        if len(pts) == 0:
            return None, math.inf
        offset_origin = np.asarray(_sub(self.origin, _vec(offset)), dtype=np.float32)
        v = pts - offset_origin
        a = v.astype(np.float64) @ np.asarray(self.axis, dtype=np.float64)
        f = self.scale * self.scale - 1
        r2 = np.einsum("ij,ij->i", v, v).astype(np.float64) + f * a * a
        idx = int(np.argmin(r2))
        return idx, math.sqrt(float(r2[idx]))

    def bound_nearest(self, box: Box3) -> float:
        """Lower bound on the elliptical distance to any point in ``box``."""
        offset_box = Box3(_sub(box.min, self.origin), _sub(box.max, self.origin))
        dmin, dmax, radius = make_bounding_cylinder(offset_box, self.axis)
        center = offset_box.center()
        parallel = 0.0
        if dmin > 0:
            parallel = dmin
        elif dmax < 0:
            parallel = dmax
        center_perp = _length(_sub(center, _scaled(self.axis, _dot(self.axis, center))))
        perp = max(center_perp - radius, 0.0)
        parallel *= self.scale
        return math.sqrt(parallel**2 + perp**2)


def polygon_normal(verts: Sequence[float], outer_ring_inds: Sequence[int]) -> Vec3:
    """Unit normal of a polygon by Newell's method.

    ``verts`` is a flat array of xyz triples; ``outer_ring_inds`` lists the
    boundary vertices in order.  Handles non-convex and non-planar polygons
    and repeated or collinear vertices.
    """
    if not outer_ring_inds:
        raise ValueError("polygon needs at least one vertex")
    pts = np.asarray(verts, dtype=np.float32).astype(np.float64).reshape(-1, 3)
    # Subtracting a fixed origin greatly reduces cancellation error.
    origin = pts[outer_ring_inds[-1]]
    normal = np.zeros(3)
    prev = np.zeros(3)
    for idx in outer_ring_inds:
        vert = pts[idx] - origin
        normal += np.cross(prev, vert)
        prev = vert
    return _normalized(_vec(normal))


def multi_partition(
    items: MutableSequence[T], class_func: Callable[[T], int], num_classes: int
) -> list[int]:
    """Partition ``items`` in place into ``num_classes`` groups.

    ``class_func(item)`` gives a class in ``[0, num_classes)``.  Returns the
    end index of each class's range.
    """
    ends = [0] * num_classes
    for i in range(len(items)):
        c = class_func(items[i])
        if not 0 <= c < num_classes:
            raise ValueError(f"class {c} outside [0,{num_classes})")
        for j in range(num_classes - 1, c, -1):
            a, b = ends[j], ends[j - 1]
            items[a], items[b] = items[b], items[a]
            ends[j] += 1
        ends[c] += 1
    return ends