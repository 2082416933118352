import logging
from functools import reduce

import pytest

from speedgeo.geometry import area as ar
from speedgeo.geometry.area import Circle, Difference, Intersection, Inverse, Rectangle, Union
from speedgeo.geometry.conversions import meters_to_degrees_lon_at_lat
from speedgeo.geometry.primitives import Point, Vector
from speedgeo.geometry.tests.fixtures import rect


# ── Union ─────────────────────────────────────────────────────────────────────
def test_union_overlaps():
    u = Union(rect(1.0, 2.0, 3.0, 4.0), rect(10.0, 10.0, 11.0, 11.0))
    assert u.overlaps(rect(2.5, 3.5, 3.5, 4.5))
    assert u.overlaps(rect(10.5, 10.5, 12.0, 12.0))
    assert not u.overlaps(rect(0.0, 0.0, 0.5, 0.5))
    assert not u.overlaps(rect(3.5, 4.5, 4.0, 5.0))
    assert u.is_compound()


def test_union_contains_operands():
    a1 = Circle(Point(1.0, 1.0), 2.0)
    a2 = rect(1.0, -1.0, 4.0, 3.0)
    u = Union(a1, a2)
    assert u.contains(a1)
    assert u.contains(a2)


def test_union_of_disjoint_operands():
    a = rect(0.0, 170.0, 1.0, 175.0)
    b = rect(0.0, -175.0, 1.0, -170.0)
    u = Union(a, b)
    assert u.contains(rect(0.2, 171.0, 0.8, 172.0))
    assert u.contains(Point(0.5, -172.0))
    # the gap between the two is not part of the union
    assert not u.contains(rect(0.0, 179.0, 1.0, -179.0))
    assert not u.contains(Point(0.5, 178.0))
    assert u.bounding_box() == rect(0.0, 170.0, 1.0, -170.0)


def test_union_bounding_box_and_origin():
    radius = float(meters_to_degrees_lon_at_lat(2.0, 1.0))
    a1 = Circle(Point(1.0, 1.0), radius)
    b1 = rect(-1.0, -1.0, 3.0, 3.0)
    assert Union(a1, b1).bounding_box() == b1
    assert Union(a1, rect(-2.0, -2.0, 3.0, 3.0)).origin() == Point(-2.0, -2.0)


def test_union_translate_and_move_to():
    u = Union(rect(0.0, 0.0, 1.0, 1.0), rect(2.0, 2.0, 3.0, 3.0))
    assert u.translate(Vector(1.0, 1.0)) == Union(rect(1.0, 1.0, 2.0, 2.0), rect(3.0, 3.0, 4.0, 4.0))
    moved = u.move_to(Point(10.0, 10.0))
    assert moved == Union(rect(10.0, 10.0, 11.0, 11.0), rect(12.0, 12.0, 13.0, 13.0))
    assert moved.origin() == Point(10.0, 10.0)


def test_union_optimize(caplog):
    r = rect(0.0, 0.0, 2.0, 2.0)
    inner = rect(0.5, 0.5, 1.0, 1.0)
    with caplog.at_level(logging.DEBUG, logger='speedgeo.geometry.area'):
        assert Union(r, r).optimize() == r
    assert 'union collapsed' in caplog.text
    assert ar.add(r, inner) == r
    assert ar.add(inner, r) == r
    far = rect(10.0, 10.0, 11.0, 11.0)
    assert ar.add(r, far) == Union(r, far)


def test_union_equality_includes_variant():
    a, b = rect(0.0, 0.0, 2.0, 2.0), rect(1.0, 1.0, 3.0, 3.0)
    assert Union(a, b) == Union(a, b)
    assert hash(Union(a, b)) == hash(Union(a, b))
    assert Union(a, b) != Intersection(a, b)


def test_from_areas():
    r1 = rect(0.0, 0.0, 1.0, 1.0)
    r2 = rect(1.0, 0.0, 2.0, 1.0)
    area = ar.from_areas([r1, r2])
    assert area.contains(r1)
    assert area.contains(r2)
    assert ar.from_areas([r1]) == r1
    with pytest.raises(ValueError):
        ar.from_areas([])


# ── Intersection ──────────────────────────────────────────────────────────────
def test_intersection():
    a = rect(0.0, 0.0, 2.0, 2.0)
    b = rect(1.0, 1.0, 3.0, 3.0)
    i = Intersection(a, b)
    assert i.bounding_box() == rect(1.0, 1.0, 2.0, 2.0)
    assert i.contains(Point(1.5, 1.5))
    assert not i.contains(Point(0.5, 0.5))
    assert i.overlaps(rect(1.2, 1.2, 1.4, 1.4))
    assert i.optimize() == i
    assert i.pixelate() == [rect(1.0, 1.0, 2.0, 2.0)]


def test_intersection_across_antimeridian():
    a = rect(0.0, 170.0, 2.0, -170.0)
    b = rect(1.0, -175.0, 3.0, -160.0)
    i = Intersection(a, b)
    assert i.bounding_box() == rect(1.0, -175.0, 2.0, -170.0)
    assert i.pixelate() == [rect(1.0, -175.0, 2.0, -170.0)]


def test_intersection_optimize_keeps_smaller():
    a = rect(0.0, 0.0, 2.0, 2.0)
    inner = rect(0.5, 0.5, 1.0, 1.0)
    assert ar.intersect(a, inner) == inner
    assert ar.intersect(inner, a) == inner


def test_empty_intersection_rejected():
    with pytest.raises(ValueError):
        Intersection(rect(0.0, 0.0, 1.0, 1.0), rect(5.0, 5.0, 6.0, 6.0))


# ── Difference ────────────────────────────────────────────────────────────────
def test_difference():
    outer = rect(0.0, 0.0, 2.0, 2.0)
    hole = rect(0.5, 0.5, 1.0, 1.0)
    d = Difference(outer, hole)
    assert d.bounding_box() == outer
    assert d.contains(Point(1.5, 1.5))
    assert not d.contains(Point(0.75, 0.75))
    assert not d.overlaps(hole)
    assert not d.overlaps(rect(5.0, 5.0, 6.0, 6.0))
    assert d.overlaps(rect(1.5, 1.5, 3.0, 3.0))
    assert d.optimize() == d


def test_difference_optimize_drops_unrelated_subtrahend():
    outer = rect(0.0, 0.0, 2.0, 2.0)
    assert ar.subtract(outer, rect(5.0, 5.0, 6.0, 6.0)) == outer


def test_empty_difference_rejected():
    with pytest.raises(ValueError):
        Difference(rect(0.5, 0.5, 1.0, 1.0), rect(0.0, 0.0, 2.0, 2.0))


# ── Inverse ───────────────────────────────────────────────────────────────────
def test_inverse():
    x = rect(-10.0, -10.0, 10.0, 10.0)
    inv = Inverse(x)
    assert inv.bounding_box() == Rectangle.world()
    assert inv.contains(Point(20.0, 20.0))
    assert not inv.contains(Point(0.0, 0.0))
    assert not inv.overlaps(rect(-5.0, -5.0, 5.0, 5.0))
    assert inv.overlaps(rect(5.0, 5.0, 20.0, 20.0))


def test_inverse_overlap_is_symmetric():
    inv = Inverse(rect(-10.0, -10.0, 10.0, 10.0))
    inside = rect(-5.0, -5.0, 5.0, 5.0)
    outside = rect(20.0, 20.0, 30.0, 30.0)
    assert inside.overlaps(inv) == inv.overlaps(inside)
    assert outside.overlaps(inv) == inv.overlaps(outside)


def test_double_inverse_optimizes_away():
    x = rect(-10.0, -10.0, 10.0, 10.0)
    assert ar.invert(ar.invert(x)) == x
    assert Inverse(Inverse(x)).optimize() == x


def test_inverse_of_world_rejected():
    with pytest.raises(ValueError):
        Inverse(Rectangle.world())


def test_inverse_translate():
    inv = Inverse(rect(0.0, 0.0, 1.0, 1.0))
    assert inv.translate(Vector(1.0, 1.0)) == Inverse(rect(1.0, 1.0, 2.0, 2.0))


# ── Nested expressions ────────────────────────────────────────────────────────
def test_nested_expression():
    block = rect(0.0, 0.0, 4.0, 4.0)
    hole = Circle(Point(2.0, 2.0), 1000.0)
    ring = Difference(block, hole)
    u = Union(ring, rect(10.0, 10.0, 11.0, 11.0))
    assert u.contains(Point(0.5, 0.5))
    assert not u.contains(Point(2.0, 2.0))
    assert u.contains(Point(10.5, 10.5))
    assert u.overlaps(rect(3.5, 3.5, 5.0, 5.0))
    assert u.bounding_box() == rect(0.0, 0.0, 11.0, 11.0)


def test_center_of_compound():
    u = Union(rect(0.0, 0.0, 1.0, 1.0), rect(2.0, 2.0, 3.0, 3.0))
    assert u.center() == Point(1.5, 1.5)


def test_evaluators_reject_non_areas():
    with pytest.raises(TypeError):
        ar.bounding_box(Point(0.0, 0.0))


def _sample_areas():
    disjoint = Union(rect(0.0, 0.0, 1.0, 1.0), rect(5.0, 5.0, 6.0, 6.0))
    hole = Union(rect(1.0, 1.0, 2.0, 2.0), rect(5.0, 5.0, 6.0, 6.0))
    return [
        rect(0.0, 0.0, 1.0, 1.0),
        rect(5.0, 5.0, 6.0, 6.0),
        rect(-1.0, 170.0, 1.0, -170.0),
        Circle(Point(0.5, 0.5), 1000.0),
        disjoint,
        hole,
        Inverse(disjoint),
        Inverse(rect(-10.0, -10.0, 10.0, 10.0)),
        Difference(rect(0.0, 0.0, 10.0, 10.0), hole),
        Intersection(rect(0.0, 0.0, 2.0, 2.0), rect(1.0, 1.0, 3.0, 3.0)),
        Union(Inverse(rect(-10.0, -10.0, 10.0, 10.0)), rect(0.0, 0.0, 1.0, 1.0)),
    ]


def test_overlap_is_symmetric_for_all_pairs():
    areas = _sample_areas()
    for a in areas:
        for b in areas:
            assert a.overlaps(b) == b.overlaps(a), (a, b)


def test_inverse_does_not_overlap_its_union_operand():
    x = Union(rect(0.0, 0.0, 1.0, 1.0), rect(5.0, 5.0, 6.0, 6.0))
    inv = Inverse(x)
    assert not inv.overlaps(x)
    assert not x.overlaps(inv)


def test_difference_does_not_overlap_its_union_hole():
    hole = Union(rect(1.0, 1.0, 2.0, 2.0), rect(5.0, 5.0, 6.0, 6.0))
    d = Difference(rect(0.0, 0.0, 10.0, 10.0), hole)
    assert not d.overlaps(hole)
    assert not hole.overlaps(d)
    assert d.overlaps(rect(8.0, 8.0, 9.0, 9.0))
    assert rect(8.0, 8.0, 9.0, 9.0).overlaps(d)


def test_every_area_contains_itself():
    for a in _sample_areas():
        assert a.contains(a), a


def test_disjoint_union_contains_itself():
    u = Union(rect(0.0, 0.0, 1.0, 1.0), rect(5.0, 5.0, 6.0, 6.0))
    assert u.contains(u)
    assert u.contains(Union(rect(0.0, 0.0, 1.0, 1.0), rect(5.0, 5.0, 6.0, 6.0)))


def test_point_contained_like_zero_size_rectangle():
    points = [Point(0.5, 2.5), Point(0.5, 0.5), Point(5.5, 5.5), Point(3.0, 3.0), Point(20.0, 20.0)]
    for a in _sample_areas() + [Union(rect(0.0, 0.0, 2.0, 2.0), rect(1.0, 1.0, 3.0, 3.0))]:
        for p in points:
            assert a.contains(p) == a.contains(Rectangle.around(p)), (a, p)


def test_point_rule_same_when_nested():
    u = Union(rect(0.0, 0.0, 1.0, 1.0), rect(5.0, 5.0, 6.0, 6.0))
    nested = Difference(u, rect(20.0, 20.0, 21.0, 21.0))
    for p in (Point(0.5, 0.5), Point(3.0, 3.0), Point(5.5, 5.5)):
        assert nested.contains(p) == u.contains(p)


def test_grow_from_nothing():
    p = Point(1.0, 2.0)
    assert ar.grow(None, p) == Rectangle.around(p)
    assert ar.grow(rect(0.0, 0.0, 1.0, 1.0), Point(2.0, 2.0)) == rect(0.0, 0.0, 2.0, 2.0)
    points = [Point(0.0, 0.0), Point(1.0, 2.0), Point(-1.0, 1.0)]
    assert reduce(ar.grow, points, None) == rect(-1.0, 0.0, 1.0, 2.0)


def test_overlaps_rejects_non_areas():
    with pytest.raises(TypeError):
        ar.overlaps(rect(0.0, 0.0, 1.0, 1.0), Point(0.0, 0.0))
