import math

import pytest

from cloudview.geometry import (
    Box3,
    EllipticalDist,
    make_bounding_cylinder,
    multi_partition,
    polygon_normal,
)


def test_polygon_normal_oriented_triangle():
    assert polygon_normal([0, 0, 0, 1, 0, 0, 1, 1, 0], [0, 1, 2]) == (0, 0, 1)


def test_polygon_normal_opposite_orientation():
    assert polygon_normal([0, 0, 0, 1, 0, 0, 1, 1, 0], [0, 2, 1]) == (0, 0, -1)


def test_polygon_normal_large_translation():
    t = 1e5
    verts = [t, t, t, t + 1, t, t, t + 1, t + 1, t]
    assert polygon_normal(verts, [0, 1, 2]) == (0, 0, 1)


def test_polygon_normal_quad():
    assert polygon_normal([0, 0, 0, 1, 0, 0, 1, 1, 0, 0, 1, 0], [0, 1, 2, 3]) == (0, 0, 1)


def test_polygon_normal_non_convex():
    verts = [0, 0, 0, 0.5, 0.5, 0, 1, 0, 0, 0.5, 1, 0]
    assert polygon_normal(verts, [0, 1, 2, 3]) == (0, 0, 1)


def test_polygon_normal_non_planar():
    verts = [0, 0, 0, 1, 0, 0.1, 1, 1, 0, 0, 1, 0.1]
    assert polygon_normal(verts, [0, 1, 2, 3]) == (0, 0, 1)


def test_polygon_normal_singular():
    verts = [0, 0, 0, 0, 0, 0, 0.5, 0, 0, 1, 0, 0, 1, 1, 0, 1, 1, 0, 0, 1, 0]
    assert polygon_normal(verts, [0, 1, 2, 3, 4, 5, 6]) == (0, 0, 1)


def test_polygon_normal_empty_ring():
    with pytest.raises(ValueError):
        polygon_normal([0, 0, 0], [])


def test_multi_partition():
    v = [1, 1, 1, 0, 1, 2, 0, 0, 3, 3, 3]
    ends = multi_partition(v, lambda x: x, 4)
    assert v == [0, 0, 0, 1, 1, 1, 1, 2, 3, 3, 3]
    assert ends == [3, 7, 8, 11]


def test_multi_partition_bad_class():
    with pytest.raises(ValueError):
        multi_partition([0, 5], lambda x: x, 2)


BOX = Box3((1, -1, -1), (2, 1, 1))


def test_cylinder_axis_x():
    dmin, dmax, radius = make_bounding_cylinder(BOX, (1, 0, 0))
    assert dmin == 1
    assert dmax == 2
    assert abs(radius - math.sqrt(2)) < 1e-15


@pytest.mark.parametrize("axis", [(0, 1, 0), (0, 0, 1)])
def test_cylinder_axis_y_z(axis):
    dmin, dmax, radius = make_bounding_cylinder(BOX, axis)
    assert dmin == -1
    assert dmax == 1
    assert abs(radius - math.sqrt(1.25)) < 1e-15


def test_cylinder_general_axis():
    n = math.sqrt(3)
    dmin, dmax, radius = make_bounding_cylinder(BOX, (1 / n, 1 / n, -1 / n))
    assert abs(dmin - -0.5773502691896258) < 1e-15
    assert abs(dmax - 2.3094010767585034) < 1e-15
    assert abs(radius - 1.4719601443879744) < 1e-15


def test_cylinder_requires_unit_axis():
    with pytest.raises(ValueError):
        make_bounding_cylinder(BOX, (2, 0, 0))


def test_isotropic_bound():
    dist = EllipticalDist((0, 0, 0), (1, 0, 0), 1)
    assert dist.bound_nearest(Box3((-1, -1, -1), (1, 1, 1))) == 0
    assert dist.bound_nearest(Box3((0, 0, 0), (1, 1, 1))) == 0
    assert dist.bound_nearest(Box3((10, -1, -1), (20, 1, 1))) == 10
    assert dist.bound_nearest(Box3((-1, -5, -1), (1, -3, 1))) <= 3
    assert dist.bound_nearest(Box3((-1, -5, -5), (1, -3, -3))) <= 3 * math.sqrt(2)
    assert abs(dist.bound_nearest(Box3((1, 2, 3), (1, 2, 3))) - math.sqrt(14)) < 1e-15


def test_anisotropic_bound():
    dist = EllipticalDist((0, 0, 0), (1, 0, 0), 0.1)
    assert dist.bound_nearest(Box3((-1, -1, -1), (1, 1, 1))) == 0
    assert dist.bound_nearest(Box3((0, 0, 0), (1, 1, 1))) == 0
    assert dist.bound_nearest(Box3((10, -1, -1), (20, 1, 1))) == 1
    assert dist.bound_nearest(Box3((-1, -5, -5), (1, -3, -3))) <= 3 * math.sqrt(2)
    expected = math.sqrt(0.1 * 0.1 * 1 * 1 + 2 * 2 + 3 * 3)
    assert abs(dist.bound_nearest(Box3((1, 2, 3), (1, 2, 3))) - expected) < 1e-15


def test_elliptical_dist_normalizes_axis():
    dist = EllipticalDist((0, 0, 0), (0, 0, 5), 2)
    assert dist.axis == (0, 0, 1)
    assert dist.scale == 2


def test_find_nearest_isotropic():
    dist = EllipticalDist((0, 0, 0), (1, 0, 0), 1)
    idx, d = dist.find_nearest((0, 0, 0), [(0, 0, 5), (1, 0, 0), (0, 3, 0)])
    assert idx == 1
    assert d == pytest.approx(1.0)


def test_find_nearest_anisotropic_prefers_axis():
    dist = EllipticalDist((0, 0, 0), (1, 0, 0), 0.1)
    idx, d = dist.find_nearest((0, 0, 0), [(0, 2, 0), (10, 0, 0)])
    assert idx == 1
    assert d == pytest.approx(1.0, rel=1e-6)


def test_find_nearest_with_offset():
    dist = EllipticalDist((100, 0, 0), (1, 0, 0), 1)
    idx, d = dist.find_nearest((100, 0, 0), [(5, 0, 0), (0, 0, 2)])
    assert idx == 1
    assert d == pytest.approx(2.0)


def test_find_nearest_empty():
    dist = EllipticalDist((0, 0, 0), (1, 0, 0), 1)
    assert dist.find_nearest((0, 0, 0), []) == (None, math.inf)


def test_box_empty_and_extend():
    box = Box3.empty()
    assert box.is_empty()
    box.extend_by((1, 2, 3))
    box.extend_by((-1, 5, 0))
    assert not box.is_empty()
    assert box.min == (-1, 2, 0)
    assert box.max == (1, 5, 3)
    assert box.center() == (0, 3.5, 1.5)


def test_box_contains():
    outer = Box3((0, 0, 0), (10, 10, 10))
    assert outer.contains(Box3((1, 1, 1), (2, 2, 2)))
    assert outer.contains(outer)
    assert not outer.contains(Box3((1, 1, 1), (11, 2, 2)))
    assert not Box3((1, 1, 1), (2, 2, 2)).contains(outer)


def test_box_str():
    assert str(Box3((1, 2, 3), (4, 5.5, 6))) == "(1 2 3)--(4 5.5 6)"