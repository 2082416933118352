"""
area.py

Composable areas on the Earth model.

An area is one of the primitives `Rectangle` and `Circle`, or an expression
over other areas: `Inverse`, `Union`, `Difference` and `Intersection`. All of
them are immutable values. The evaluator functions in this module
(`overlaps`, `contains`, `bounding_box`, `translate`, `move_to`, `optimize`)
dispatch on the variant; the same operations are available as methods on every
area.

Overlap and containment are approximations. For primitives they compare
bounding boxes, splitting boxes that wrap across the antimeridian into an
eastern and a western half. Compound expressions combine the answers of their
operands.

Builders:
- `add(a, b)`, `subtract(a, b)`, `intersect(a, b)`, `invert(a)` construct the
  expression and return its optimized form.
- `from_areas(areas)` folds `add` over a non-empty collection.
- `grow(rectangle, point)` accepts None for the rectangle, for folding points
  into a bounding box.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, List, Optional, Union as TypingUnion

from speedgeo.geometry.angle_utils import map_to_lat, shortest_lon_delta_deg
from speedgeo.geometry.config import LAT_MAX, LAT_MIN, LON180, LON_MIN
from speedgeo.geometry.conversions import (
    degrees_lat_to_meters,
    degrees_lon_to_meters_at_lat,
    meters_to_degrees_lat,
    meters_to_degrees_lon_at_lat,
)
from speedgeo.geometry.primitives import (
    GeoObject,
    Line,
    Point,
    SouthWestNorthEast,
    Vector,
)

logger = logging.getLogger(__name__)

# Inner bounding box of a circle: the square inscribed in it.
COS45 = 0.707106781186548


class Area(GeoObject):
    """Base class of all areas. Methods delegate to the module evaluators."""

    def overlaps(self, other: Area) -> bool:
        return overlaps(self, other)

    def contains(self, other: TypingUnion[Area, Point]) -> bool:
        return contains(self, other)

    def bounding_box(self) -> Rectangle:
        return bounding_box(self)

    def translate(self, vector: Vector) -> Area:
        return translate(self, vector)

    def move_to(self, origin: Point) -> Area:
        return move_to(self, origin)

    def optimize(self) -> Area:
        return optimize(self)

    def is_compound(self) -> bool:
        return is_compound(self)

    def pixelate(self) -> List[Rectangle]:
        from speedgeo.geometry.pixelation import pixelate
        return pixelate(self)

    def add(self, other: Area) -> Area:
        return add(self, other)

    def subtract(self, other: Area) -> Area:
        return subtract(self, other)

    def intersect(self, other: Area) -> Area:
        return intersect(self, other)

    def invert(self) -> Area:
        return invert(self)

    def origin(self) -> Point:
        """South-west corner of the bounding box."""
        return bounding_box(self).south_west

    def center(self) -> Point:
        """Center of the bounding box, following wraparound.

        The elevation is the mean of the corner elevations, or absent if
        either corner has none.
        """
        box = bounding_box(self)
        sw, ne = box.south_west, box.north_east
        elevation = (sw.elevation_or_nan() + ne.elevation_or_nan()) / 2.0
        lat = Line(Point(sw.lat, 0.0), Point(ne.lat, 0.0)).center().lat
        lon = Line(Point(0.0, sw.lon), Point(0.0, ne.lon)).center().lon
        return Point(lat, lon, elevation)


# ───────────────────────────────────────────────────────────────────────────────
# Primitives
# ───────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Rectangle(SouthWestNorthEast, Area):
    """
    Rectangular area between a south-west and a north-east corner.

    Latitudes are swapped on construction if needed. If south_west.lon is
    larger than north_east.lon the rectangle wraps across the antimeridian.
    """

    south_west: Point
    north_east: Point

    def __post_init__(self):
        self._normalize()

    @classmethod
    def world(cls) -> Rectangle:
        return cls(Point(LAT_MIN, LON_MIN), Point(LAT_MAX, LON180))

    @classmethod
    def around(cls, point: Point) -> Rectangle:
        """Zero-size rectangle at a point."""
        return cls(point, point)

    def with_south_west(self, south_west: Point) -> Rectangle:
        return Rectangle(south_west, self.north_east)

    def with_north_east(self, north_east: Point) -> Rectangle:
        return Rectangle(self.south_west, north_east)

    def northing(self) -> float:
        return abs(self.north_east.lat - self.south_west.lat)

    def is_wrapped(self) -> bool:
        return self.south_west.lon > self.north_east.lon

    def halves(self) -> List[Rectangle]:
        """The rectangle itself, or its west and east halves if it wraps."""
        if not self.is_wrapped():
            return [self]
        sw, ne = self.south_west, self.north_east
        return [
            Rectangle(Point(sw.lat, LON_MIN), Point(ne.lat, ne.lon)),
            Rectangle(Point(sw.lat, sw.lon), Point(ne.lat, LON180)),
        ]

    def expand(self, meters: float) -> Rectangle:
        """Grow the rectangle by `meters` on every side."""
        lat_delta = float(meters_to_degrees_lat(meters))
        south_lon_delta = float(meters_to_degrees_lon_at_lat(meters, self.south_west.lat))
        north_lon_delta = float(meters_to_degrees_lon_at_lat(meters, self.north_east.lat))
        sw, ne = self.south_west, self.north_east
        return Rectangle(
            Point(map_to_lat(sw.lat - lat_delta), sw.lon - south_lon_delta),
            Point(map_to_lat(ne.lat + lat_delta), ne.lon + north_lon_delta))

    def grow(self, other: TypingUnion[Point, Rectangle]) -> Rectangle:
        """Smallest rectangle that holds this one and a point or rectangle.

        A rectangle is grown by its south-west corner, then by its north-east
        corner.
        """
        if isinstance(other, Rectangle):
            return self._grow_point(other.south_west)._grow_point(other.north_east)
        if isinstance(other, Point):
            return self._grow_point(other)
        raise TypeError(f"Cannot grow a rectangle with {type(other).__name__}")

    def _grow_point(self, point: Point) -> Rectangle:
        sw, ne = self.south_west, self.north_east
        south = min(sw.lat, point.lat)
        north = max(ne.lat, point.lat)

        # Two ways to extend the longitudes: westward or eastward.
        if self.is_wrapped():
            west1, east1 = min(sw.lon, point.lon), min(ne.lon, point.lon)
            west2, east2 = max(sw.lon, point.lon), max(ne.lon, point.lon)
        else:
            west1, east1 = min(sw.lon, point.lon), max(ne.lon, point.lon)
            west2, east2 = max(sw.lon, point.lon), min(ne.lon, point.lon)

        rect1 = Rectangle(Point(south, west1), Point(north, east1))
        rect2 = Rectangle(Point(south, west2), Point(north, east2))
        rect3 = Rectangle(sw.with_lat(south), ne.with_lat(north))

        # Smallest candidate that got wider, else only the latitudes changed.
        smallest = rect1 if rect1.easting() <= rect2.easting() else rect2
        if smallest.easting() > self.easting():
            return smallest
        return rect3


@dataclass(frozen=True)
class Circle(Area):
    """
    Circular area around a center point.

    The circle's origin and center are both its center point, so
    `move_to` places the center.

    Attributes:
        center_point: Point
        radius_meters: radius, >= 0
    """

    center_point: Point
    radius_meters: float

    def __post_init__(self):
        if self.radius_meters < 0.0:
            raise ValueError(f"Radius must be >= 0: {self.radius_meters}")
        object.__setattr__(self, 'radius_meters', float(self.radius_meters))

    @classmethod
    def through(cls, center: Point, point: Point) -> Circle:
        """Circle around `center` whose edge passes through `point`."""
        delta_lat = abs(center.lat - point.lat)
        delta_lon = shortest_lon_delta_deg(center.lon, point.lon)
        h = float(degrees_lat_to_meters(delta_lat))
        w = float(degrees_lon_to_meters_at_lat(delta_lon, (center.lat + point.lat) / 2.0))
        return cls(center, math.sqrt((w * w) + (h * h)))

    def with_center(self, center: Point) -> Circle:
        return Circle(center, self.radius_meters)

    def with_radius_meters(self, radius_meters: float) -> Circle:
        return Circle(self.center_point, radius_meters)

    def origin(self) -> Point:
        return self.center_point

    def center(self) -> Point:
        return self.center_point

    def inner_bounding_box(self) -> Rectangle:
        """Largest square that fits inside the circle."""
        return self._box(COS45)

    def _box(self, factor: float) -> Rectangle:
        lat = self.center_point.lat
        lon = self.center_point.lon
        lat_delta = float(meters_to_degrees_lat(self.radius_meters)) * factor
        lon_delta = float(meters_to_degrees_lon_at_lat(self.radius_meters, lat)) * factor
        return Rectangle(
            Point(map_to_lat(lat - lat_delta), lon - lon_delta),
            Point(map_to_lat(lat + lat_delta), lon + lon_delta))


# ───────────────────────────────────────────────────────────────────────────────
# Expressions
# ───────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Inverse(Area):
    """Everything outside `operand`."""

    operand: Area

    def __post_init__(self):
        if contains(self.operand, Rectangle.world()):
            raise ValueError(f"Inverse of an area that covers the world is empty: {self.operand}")


@dataclass(frozen=True)
class Union(Area):
    """Everything in `left` or `right`."""

    left: Area
    right: Area


@dataclass(frozen=True)
class Difference(Area):
    """Everything in `left` that is not in `right`."""

    left: Area
    right: Area

    def __post_init__(self):
        if contains(self.right, self.left):
            raise ValueError(f"Difference is empty, {self.right} contains {self.left}")


@dataclass(frozen=True)
class Intersection(Area):
    """Everything in both `left` and `right`."""

    left: Area
    right: Area

    def __post_init__(self):
        if not overlaps(self.left, self.right) or not _box_intersections(
                bounding_box(self.left), bounding_box(self.right)):
            raise ValueError(f"Intersection is empty, {self.left} does not overlap {self.right}")


PRIMITIVES = (Rectangle, Circle)
EXPRESSIONS = (Inverse, Union, Difference, Intersection)


# ───────────────────────────────────────────────────────────────────────────────
# Bounding box arithmetic (non-wrapped halves only)
# ───────────────────────────────────────────────────────────────────────────────
def _box_overlaps(a: Rectangle, b: Rectangle) -> bool:
    return not (
        a.south_west.lat > b.north_east.lat
        or a.north_east.lat < b.south_west.lat
        or a.south_west.lon > b.north_east.lon
        or a.north_east.lon < b.south_west.lon)


def _box_contains(a: Rectangle, b: Rectangle) -> bool:
    return (
        a.south_west.lat <= b.south_west.lat
        and a.north_east.lat >= b.north_east.lat
        and a.south_west.lon <= b.south_west.lon
        and a.north_east.lon >= b.north_east.lon)


def box_intersection(a: Rectangle, b: Rectangle) -> Optional[Rectangle]:
    if not _box_overlaps(a, b):
        return None
    return Rectangle(
        Point(max(a.south_west.lat, b.south_west.lat), max(a.south_west.lon, b.south_west.lon)),
        Point(min(a.north_east.lat, b.north_east.lat), min(a.north_east.lon, b.north_east.lon)))


def _box_intersections(a: Rectangle, b: Rectangle) -> List[Rectangle]:
    pieces = (box_intersection(x, y) for x in a.halves() for y in b.halves())
    return [p for p in pieces if p is not None]


def _rect_overlaps(a: Rectangle, b: Rectangle) -> bool:
    return any(_box_overlaps(x, y) for x in a.halves() for y in b.halves())


def _rect_contains(a: Rectangle, b: Rectangle) -> bool:
    # every half of b must fit in one half of a
    return all(any(_box_contains(x, y) for x in a.halves()) for y in b.halves())


# ───────────────────────────────────────────────────────────────────────────────
# Evaluators
# ───────────────────────────────────────────────────────────────────────────────
def is_compound(area: Area) -> bool:
    return isinstance(area, EXPRESSIONS)


def _require_area(area) -> None:
    if not isinstance(area, PRIMITIVES + EXPRESSIONS):
        raise TypeError(f"Not an area: {type(area).__name__}")


def overlaps(area: Area, other: Area) -> bool:
    """True if the two areas (approximately) share at least one point.

    The answer does not depend on the order of the arguments. A union on
    either side is split into its operands first. Two primitives compare
    bounding boxes. An expression against a primitive is answered by the
    expression, and two expressions must both agree.
    """
    _require_area(area)
    _require_area(other)
    if isinstance(area, Union):
        return overlaps(area.left, other) or overlaps(area.right, other)
    if isinstance(other, Union):
        return overlaps(area, other.left) or overlaps(area, other.right)
    if isinstance(area, PRIMITIVES):
        if isinstance(other, PRIMITIVES):
            return _rect_overlaps(bounding_box(area), bounding_box(other))
        return _expression_overlaps(other, area)
    if isinstance(other, PRIMITIVES):
        return _expression_overlaps(area, other)
    return _expression_overlaps(area, other) and _expression_overlaps(other, area)


def _expression_overlaps(area: Area, other: Area) -> bool:
    # one-sided answer of a non-union expression
    if isinstance(area, Intersection):
        return overlaps(area.left, other) and overlaps(area.right, other)
    if isinstance(area, Difference):
        return overlaps(area.left, other) and not contains(area.right, other)
    return not contains(area.operand, other)


def contains(area: Area, other: TypingUnion[Area, Point]) -> bool:
    """True if `other` (an area or a point) lies entirely within `area`.

    A point is treated as the zero-size rectangle at that point, at every
    level of an expression. Every area contains itself.
    """
    if isinstance(other, Point):
        other = Rectangle.around(other)
    _require_area(area)
    if area == other:
        return True
    if isinstance(area, PRIMITIVES):
        return _rect_contains(bounding_box(area), bounding_box(other))
    if isinstance(area, Union):
        if overlaps(area.left, area.right):
            return _rect_contains(bounding_box(area), bounding_box(other))
        return contains(area.left, other) or contains(area.right, other)
    if isinstance(area, Intersection):
        return contains(area.left, other) and contains(area.right, other)
    if isinstance(area, Difference):
        return contains(area.left, other) and not overlaps(area.right, other)
    if isinstance(area, Inverse):
        return not overlaps(area.operand, other)
    raise TypeError(f"Not an area: {type(area).__name__}")


def bounding_box(area: Area) -> Rectangle:
    """Smallest rectangle that holds the area."""
    if isinstance(area, Rectangle):
        return area
    if isinstance(area, Circle):
        return area._box(1.0)
    if isinstance(area, Union):
        return bounding_box(area.left).grow(bounding_box(area.right))
    if isinstance(area, Intersection):
        pieces = _box_intersections(bounding_box(area.left), bounding_box(area.right))
        return reduce(Rectangle.grow, pieces)
    if isinstance(area, Difference):
        return bounding_box(area.left)
    if isinstance(area, Inverse):
        return Rectangle.world()
    raise TypeError(f"Not an area: {type(area).__name__}")


def translate(area: Area, vector: Vector) -> Area:
    if isinstance(area, Rectangle):
        return Rectangle(area.south_west.translate(vector), area.north_east.translate(vector))
    if isinstance(area, Circle):
        return Circle(area.center_point.translate(vector), area.radius_meters)
    if isinstance(area, Inverse):
        return Inverse(translate(area.operand, vector))
    if isinstance(area, (Union, Difference, Intersection)):
        return type(area)(translate(area.left, vector), translate(area.right, vector))
    raise TypeError(f"Not an area: {type(area).__name__}")


def move_to(area: Area, origin: Point) -> Area:
    """Move the area so its origin lands on `origin`.

    A rectangle moves its south-west corner, a circle its center. Expressions
    are translated by the vector from their bounding box south-west corner.
    """
    if isinstance(area, Rectangle):
        return Rectangle(origin, origin.translate(Vector(area.northing(), area.easting())))
    if isinstance(area, Circle):
        return Circle(origin, area.radius_meters)
    if isinstance(area, EXPRESSIONS):
        sw = bounding_box(area).south_west
        return translate(area, Vector(origin.lat - sw.lat, origin.lon - sw.lon))
    raise TypeError(f"Not an area: {type(area).__name__}")


def optimize(area: Area) -> Area:
    """Return a simpler, equivalent area where an operand makes the other redundant."""
    if isinstance(area, Union):
        if contains(area.left, area.right):
            logger.debug("union collapsed to left operand")
            return optimize(area.left)
        if contains(area.right, area.left):
            logger.debug("union collapsed to right operand")
            return optimize(area.right)
    elif isinstance(area, Intersection):
        if contains(area.left, area.right):
            logger.debug("intersection collapsed to right operand")
            return optimize(area.right)
        if contains(area.right, area.left):
            logger.debug("intersection collapsed to left operand")
            return optimize(area.left)
    elif isinstance(area, Difference):
        if not overlaps(area.right, area.left):
            logger.debug("difference collapsed to left operand")
            return optimize(area.left)
    elif isinstance(area, Inverse):
        if isinstance(area.operand, Inverse):
            logger.debug("double inverse removed")
            return optimize(area.operand.operand)
    return area


# ───────────────────────────────────────────────────────────────────────────────
# Builders
# ───────────────────────────────────────────────────────────────────────────────
def add(a: Area, b: Area) -> Area:
    return optimize(Union(a, b))


def subtract(a: Area, b: Area) -> Area:
    return optimize(Difference(a, b))


def intersect(a: Area, b: Area) -> Area:
    return optimize(Intersection(a, b))


def invert(a: Area) -> Area:
    return optimize(Inverse(a))


def from_areas(areas: Iterable[Area]) -> Area:
    """Union of all areas in a non-empty collection."""
    areas = list(areas)
    if not areas:
        raise ValueError("from_areas needs at least one area")
    return reduce(add, areas)


def grow(rectangle: Optional[Rectangle], point: Point) -> Rectangle:
    """Grow `rectangle` by `point`, starting from the point itself if there is no rectangle yet.

    Handy when folding a sequence of points into their bounding box.
    """
    if rectangle is None:
        return Rectangle.around(point)
    return rectangle.grow(point)
