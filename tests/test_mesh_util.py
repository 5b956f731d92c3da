import math

import numpy as np
import pytest

from cloudview.mesh_util import bounding_box, centroid, make_edges, make_smooth_normals

SQUARE = [0, 0, 0, 1, 0, 0, 1, 1, 0, 0, 1, 0]


def test_centroid_adds_offset_to_mean():
    c = centroid((10, 20, 30), [0, 0, 0, 2, 4, 6])
    assert c == pytest.approx((11.0, 22.0, 33.0))


def test_centroid_of_no_vertices_is_offset():
    assert centroid((1.5, -2.0, 3.0), []) == (1.5, -2.0, 3.0)


def test_centroid_rejects_ragged_vertices():
    with pytest.raises(ValueError):
        centroid((0, 0, 0), [1, 2])


def test_bounding_box_is_shifted_by_offset():
    box = bounding_box((100, 200, 300), SQUARE)
    assert box.min == (100.0, 200.0, 300.0)
    assert box.max == (101.0, 201.0, 300.0)


def test_bounding_box_of_no_vertices_is_empty():
    box = bounding_box((5, 5, 5), [])
    assert box.is_empty()


def test_bounding_box_contains_every_shifted_vertex():
    verts = [3, -1, 2, -4, 5, 0, 1, 1, 1]
    offset = (0.5, 0.5, 0.5)
    box = bounding_box(offset, verts)
    pts = np.asarray(verts, dtype=float).reshape(-1, 3) + offset
    for p in pts:
        assert all(lo <= c <= hi for lo, c, hi in zip(box.min, p, box.max))


def test_smooth_normals_of_flat_triangle():
    verts = [0, 0, 0, 1, 0, 0, 0, 1, 0, 5, 5, 5]
    normals = make_smooth_normals(verts, [0, 1, 2]).reshape(-1, 3)
    assert normals.shape == (4, 3)
    for n in normals[:3]:
        assert tuple(n) == pytest.approx((0.0, 0.0, 1.0))
    assert tuple(normals[3]) == (0.0, 0.0, 0.0)


def test_smooth_normals_flip_with_winding():
    verts = [0, 0, 0, 1, 0, 0, 0, 1, 0]
    a = make_smooth_normals(verts, [0, 1, 2])
    b = make_smooth_normals(verts, [0, 2, 1])
    assert np.allclose(a, -b)


def test_smooth_normals_are_unit_length_on_bent_surface():
    verts = [0, 0, 0, 1, 0, 0, 1, 1, 0, 0, 1, 1]
    normals = make_smooth_normals(verts, [0, 1, 2, 0, 2, 3]).reshape(-1, 3)
    for n in normals:
        assert math.isclose(float(np.linalg.norm(n)), 1.0, rel_tol=1e-6)


def test_smooth_normals_degenerate_triangle_is_zero():
    verts = [0, 0, 0, 1, 0, 0, 2, 0, 0]
    assert not make_smooth_normals(verts, [0, 1, 2]).any()


def test_smooth_normals_bad_index():
    with pytest.raises(IndexError):
        make_smooth_normals(SQUARE, [0, 1, 7])


def test_make_edges_single_triangle():
    assert make_edges([2, 0, 1]) == [0, 1, 0, 2, 1, 2]


def test_make_edges_shared_edge_appears_once():
    edges = make_edges([0, 1, 2, 2, 1, 3])
    pairs = list(zip(edges[::2], edges[1::2]))
    assert len(pairs) == 5
    assert len(set(pairs)) == len(pairs)
    assert pairs == sorted(pairs)
    assert all(a < b for a, b in pairs)


def test_make_edges_empty():
    assert make_edges([]) == []


def test_make_edges_rejects_partial_triangle():
    with pytest.raises(ValueError):
        make_edges([0, 1])