"""
Coordinate & Vector Primitives
==============================

Pure value types - NO state, NO side effects.

Design:
- Immutable values (frozen dataclass pattern)
- Normalization happens once, in __post_init__
- Fail-fast validation (ValueError on out-of-range input)
- Thread-safe by design (immutability)
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from speedgeo.geometry.angle_utils import easting_deg, map_to_lon
from speedgeo.geometry.config import (
    EASTING_LIMIT,
    LAT_MAX,
    LAT_MIN,
    NORTHING_LIMIT,
)
from speedgeo.geometry.conversions import (
    distance_in_meters,
    meters_to_degrees_lat,
    meters_to_degrees_lon_at_lat,
)
from speedgeo.geometry.utils import is_between, limit_to


class GeoObject:
    """Base for everything that has an origin and can be moved around.

    Subclasses provide `origin()`, `center()`, `translate(vector)` and
    `move_to(origin)`.
    """

    def origin(self) -> Point:
        raise NotImplementedError

    def center(self) -> Point:
        raise NotImplementedError

    def translate(self, vector: Vector) -> GeoObject:
        raise NotImplementedError

    def move_to(self, origin: Point) -> GeoObject:
        raise NotImplementedError

    def translate_meters(
        self,
        northing_meters: float,
        easting_meters: float,
        elevation_meters: float = 0.0,
    ) -> GeoObject:
        """Translate by a distance in meters, converted at the origin latitude."""
        lat = self.origin().lat
        return self.translate(Vector(
            float(meters_to_degrees_lat(northing_meters)),
            float(meters_to_degrees_lon_at_lat(easting_meters, lat)),
            elevation_meters,
        ))


@dataclass(frozen=True)
class Vector:
    """
    A translation on the Earth model, in degrees.

    Attributes:
        northing: degrees north, in [-180, 180]
        easting: degrees east, in [-360, 360]
        elevation: meters up (default 0)
    """

    northing: float
    easting: float
    elevation: float = 0.0

    def __post_init__(self):
        if not is_between(self.northing, -NORTHING_LIMIT, NORTHING_LIMIT):
            raise ValueError(f"Northing not in [-180, 180]: {self.northing}")
        if not is_between(self.easting, -EASTING_LIMIT, EASTING_LIMIT):
            raise ValueError(f"Easting not in [-360, 360]: {self.easting}")


@dataclass(frozen=True)
class Point(GeoObject):
    """
    Immutable geographic point.

    Longitude is canonicalized into [-180, 180). An absent elevation is
    `None`, which is not the same as 0; NaN is stored as `None`.

    Attributes:
        lat: latitude in [-90, 90]
        lon: longitude in [-180, 180)
        elevation: meters, or None
    """

    lat: float
    lon: float
    elevation: Optional[float] = None

    def __post_init__(self):
        if not is_between(self.lat, LAT_MIN, LAT_MAX):
            raise ValueError(f"Latitude not in [-90, 90]: {self.lat}")
        object.__setattr__(self, 'lat', float(self.lat))
        object.__setattr__(self, 'lon', map_to_lon(self.lon))
        if self.elevation is not None:
            elevation = float(self.elevation)
            object.__setattr__(self, 'elevation', None if math.isnan(elevation) else elevation)

    def elevation_or_nan(self) -> float:
        return math.nan if self.elevation is None else self.elevation

    def with_lat(self, lat: float) -> Point:
        return Point(lat, self.lon, self.elevation)

    def with_lon(self, lon: float) -> Point:
        return Point(self.lat, lon, self.elevation)

    def with_elevation(self, elevation: Optional[float]) -> Point:
        return Point(self.lat, self.lon, elevation)

    def origin(self) -> Point:
        return self

    def center(self) -> Point:
        return self

    def translate(self, vector: Vector) -> Point:
        """Add a vector; latitude is clamped, longitude wraps once."""
        new_lat = limit_to(self.lat + vector.northing, LAT_MIN, LAT_MAX)
        new_lon = self.lon + vector.easting
        if new_lon < -180.0:
            new_lon += 360.0
        elif new_lon >= 180.0:
            new_lon -= 360.0
        new_elevation = None if self.elevation is None else self.elevation + vector.elevation
        return Point(new_lat, new_lon, new_elevation)

    def move_to(self, origin: Point) -> Point:
        return origin


def _ordered_by_lat(south_west: Point, north_east: Point) -> Tuple[Point, Point]:
    # Swap latitudes only; the longitude order may express wraparound.
    if south_west.lat <= north_east.lat:
        return south_west, north_east
    return south_west.with_lat(north_east.lat), north_east.with_lat(south_west.lat)


class SouthWestNorthEast(GeoObject):
    """Shared behaviour of shapes defined by a south-west/north-east pair."""

    south_west: Point
    north_east: Point

    def _normalize(self) -> None:
        sw, ne = _ordered_by_lat(self.south_west, self.north_east)
        object.__setattr__(self, 'south_west', sw)
        object.__setattr__(self, 'north_east', ne)

    def northing(self) -> float:
        """Degrees north from south-west to north-east, in [0, 180]."""
        return self.north_east.lat - self.south_west.lat

    def easting(self) -> float:
        """Eastward span from south-west to north-east, in [0, 360)."""
        return easting_deg(self.south_west.lon, self.north_east.lon)

    def origin(self) -> Point:
        return self.south_west


@dataclass(frozen=True)
class Line(SouthWestNorthEast):
    """
    A line segment between two points.

    The latitudes are swapped on construction if needed, so that
    `south_west.lat <= north_east.lat`. The longitudes are kept in order:
    if south_west.lon > north_east.lon the line runs across the antimeridian.
    """

    south_west: Point
    north_east: Point

    def __post_init__(self):
        self._normalize()

    def with_south_west(self, south_west: Point) -> Line:
        return Line(south_west, self.north_east)

    def with_north_east(self, north_east: Point) -> Line:
        return Line(self.south_west, north_east)

    def center(self) -> Point:
        lat = (self.south_west.lat + self.north_east.lat) / 2.0
        east = self.north_east.lon
        if east < self.south_west.lon:
            east += 360.0
        return Point(lat, (east + self.south_west.lon) / 2.0)

    def translate(self, vector: Vector) -> Line:
        return Line(self.south_west.translate(vector), self.north_east.translate(vector))

    def move_to(self, origin: Point) -> Line:
        return Line(origin, origin.translate(Vector(self.northing(), self.easting())))

    def length_meters(self) -> float:
        return distance_in_meters(self.south_west, self.north_east)

    def is_wrapped_on_long_side(self) -> bool:
        return self.easting() >= 180.0


def shortest_line(from_point: Point, to_point: Point) -> Line:
    """Return the line between two points that runs along the short side of the Earth."""
    shortest = Line(from_point, to_point)
    if shortest.is_wrapped_on_long_side():
        shortest = Line(to_point, from_point)
    return shortest


@dataclass(frozen=True)
class PolyLine(GeoObject):
    """
    Immutable sequence of at least two points.

    Attributes:
        points: tuple of Point
    """

    points: Tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self):
        points = tuple(self.points)
        if len(points) < 2:
            raise ValueError(f"PolyLine needs at least 2 points, got {len(points)}")
        object.__setattr__(self, 'points', points)

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, i: int) -> Point:
        return self.points[i]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def origin(self) -> Point:
        return self.points[0]

    def center(self) -> Point:
        """Center of the bounds spanned by the points.

        The eastern and western bounds are only extended along the short side
        of the Earth.
        """
        south_west = self.points[0]
        north_east = self.points[0]
        for point in self.points:
            if Line(south_west, point).is_wrapped_on_long_side():
                south_west = south_west.with_lon(point.lon)
            elif not Line(north_east, point).is_wrapped_on_long_side():
                north_east = north_east.with_lon(point.lon)
            if point.lat < south_west.lat:
                south_west = south_west.with_lat(point.lat)
            elif point.lat > north_east.lat:
                north_east = north_east.with_lat(point.lat)
        return Point(
            (south_west.lat + north_east.lat) / 2.0,
            (south_west.lon + north_east.lon) / 2.0)

    def as_lines(self) -> List[Line]:
        return [Line(a, b) for a, b in zip(self.points[:-1], self.points[1:])]

    def line(self, i: int) -> Line:
        if not 0 <= i <= len(self.points) - 2:
            raise IndexError(f"line index out of range: {i}")
        return Line(self.points[i], self.points[i + 1])

    def length_meters(self) -> float:
        return sum(line.length_meters() for line in self.as_lines())

    def translate(self, vector: Vector) -> PolyLine:
        return PolyLine(tuple(p.translate(vector) for p in self.points))

    def move_to(self, origin: Point) -> PolyLine:
        first = self.points[0]
        line = Line(first, origin)
        northing = line.northing() * (1.0 if origin.lat >= first.lat else -1.0)
        return self.translate(Vector(northing, line.easting()))

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> PolyLine:
        return cls(tuple(points))


@dataclass(frozen=True)
class Position3D:
    """
    A point on the map plus an elevation in meters.

    Unlike `Point.elevation`, this pairs a plain 2D position with a separate
    height reading, for example from a GPS fix. NaN is stored as `None`.
    """

    point: Point
    elevation_meters: Optional[float] = None

    def __post_init__(self):
        if self.elevation_meters is not None:
            elevation = float(self.elevation_meters)
            object.__setattr__(self, 'elevation_meters', None if math.isnan(elevation) else elevation)

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float, elevation_meters: Optional[float] = None) -> Position3D:
        return cls(Point(lat, lon), elevation_meters)

    def with_point(self, point: Point) -> Position3D:
        return Position3D(point, self.elevation_meters)

    def with_elevation_meters(self, elevation_meters: Optional[float]) -> Position3D:
        return Position3D(self.point, elevation_meters)
