"""
Geometry package: points, vectors, lines, areas and geohashes.

Most callers only need the names re-exported here; the evaluator functions
live in `speedgeo.geometry.area`.
"""
from speedgeo.geometry.area import (
    Area,
    Circle,
    Difference,
    Intersection,
    Inverse,
    Rectangle,
    Union,
    from_areas,
)
from speedgeo.geometry.geohash import GeoHash
from speedgeo.geometry.primitives import Line, Point, PolyLine, Vector, shortest_line

__all__ = [
    'Area', 'Circle', 'Difference', 'Intersection', 'Inverse', 'Rectangle', 'Union',
    'from_areas', 'GeoHash', 'Line', 'Point', 'PolyLine', 'Vector', 'shortest_line',
]
