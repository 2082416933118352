"""
pixelation.py

Decompose areas into lists of non-wrapped rectangles ("pixels").

Pixels may overlap and there is no canonical pixel count; consumers such as
spatial indexes must tolerate both. Every area yields at least one pixel.

`to_shapely` hands a pixel list to shapely for spatial queries and export.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from shapely.geometry import MultiPolygon, box

from speedgeo.geometry.area import (
    Area,
    Circle,
    Difference,
    Intersection,
    Inverse,
    Rectangle,
    Union,
    box_intersection,
    bounding_box,
    contains,
)
from speedgeo.geometry.config import LAT_MAX, LAT_MIN, LON180, LON_MIN
from speedgeo.geometry.primitives import Point

logger = logging.getLogger(__name__)


def split_wrapped(rect: Rectangle) -> List[Rectangle]:
    """Split a rectangle that wraps across the antimeridian in two halves.

    A rectangle that does not wrap is returned as the only element.
    """
    return rect.halves()


def pixelate(area: Area) -> List[Rectangle]:
    """Cover an area with non-wrapped rectangles."""
    if isinstance(area, Rectangle):
        return split_wrapped(area)
    if isinstance(area, Circle):
        return split_wrapped(bounding_box(area))
    if isinstance(area, Union):
        return pixelate(area.left) + pixelate(area.right)
    if isinstance(area, Intersection):
        return _pixelate_intersection(area)
    if isinstance(area, Difference):
        return _pixelate_difference(area)
    if isinstance(area, Inverse):
        return _pixelate_inverse(area)
    raise TypeError(f"Not an area: {type(area).__name__}")


def _pixelate_intersection(area: Intersection) -> List[Rectangle]:
    left = pixelate(area.left)
    right = pixelate(area.right)
    pixels = []
    for a in left:
        for b in right:
            piece = box_intersection(a, b)
            if piece is not None:
                pixels.append(piece)
    if not pixels:
        logger.debug("no overlapping pixels in intersection, using bounding box")
        return split_wrapped(bounding_box(area))
    return pixels


def _pixelate_difference(area: Difference) -> List[Rectangle]:
    left = pixelate(area.left)
    pixels = [p for p in left if not contains(area.right, p)]
    if not pixels:
        logger.debug("all pixels of difference removed, keeping left operand")
        return left
    return pixels


def _pixelate_inverse(area: Inverse) -> List[Rectangle]:
    operand = bounding_box(area.operand)
    sw, ne = operand.south_west, operand.north_east
    pixels = []

    # south and north of the operand, all around the world
    if sw.lat > LAT_MIN:
        pixels.append(Rectangle(Point(LAT_MIN, LON_MIN), Point(sw.lat, LON180)))
    if ne.lat < LAT_MAX:
        pixels.append(Rectangle(Point(ne.lat, LON_MIN), Point(LAT_MAX, LON180)))

    # west and east of the operand, within its latitudes
    if operand.is_wrapped():
        pixels.append(Rectangle(Point(sw.lat, ne.lon), Point(ne.lat, sw.lon)))
    else:
        if sw.lon > LON_MIN:
            pixels.append(Rectangle(Point(sw.lat, LON_MIN), Point(ne.lat, sw.lon)))
        if ne.lon < LON180:
            pixels.append(Rectangle(Point(sw.lat, ne.lon), Point(ne.lat, LON180)))

    # the bounding box is only partly covered by anything but a rectangle
    if not isinstance(area.operand, Rectangle):
        pixels.extend(pixelate(operand))
    return pixels


def surface_degrees(rectangles: Iterable[Rectangle]) -> float:
    """Sum of the pixel sizes in square degrees. Overlaps are counted twice."""
    return sum(r.northing() * r.easting() for r in rectangles)


def to_shapely(rectangles: Iterable[Rectangle]) -> MultiPolygon:
    """Convert pixels to a shapely MultiPolygon in (lon, lat) order."""
    polygons = []
    for rect in rectangles:
        for half in split_wrapped(rect):
            polygons.append(box(
                half.south_west.lon, half.south_west.lat,
                half.north_east.lon, half.north_east.lat))
    return MultiPolygon(polygons)
