"""
mercator.py

Normalized spherical Mercator coordinates, as used to address map tiles.

x runs from 0 (lon -180) to 1 (lon 180); y runs from 0 (north) to 1 (south).
Latitudes are clamped to the Mercator band before projecting, since the poles
project to infinity.

Usage:
    from speedgeo.tilemap.mercator import MercatorPoint, lat_lon_to_mercs

    MercatorPoint.from_point(Point(52.3765, 4.908))
    x, y = lat_lon_to_mercs(lats, lons)        # numpy arrays in, arrays out
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from speedgeo.geometry.config import MERCATOR
from speedgeo.geometry.primitives import Point
from speedgeo.geometry.utils import is_between

WORLD_SIZE = MERCATOR['world_size_m']
WORLD_RADIUS = MERCATOR['world_radius_m']


def _as_result(arr, original):
    if np.ndim(original) == 0:
        return float(arr)
    return arr


def lat_lon_to_mercs(lat, lon) -> Tuple:
    """Project latitude and longitude to normalized Mercator (x, y).

    Accepts scalars or numpy arrays. Both results are clipped to [0, 1].
    """
    lat_c = np.clip(np.asarray(lat, dtype=float), MERCATOR['lat_min'], MERCATOR['lat_max'])
    lon_a = np.asarray(lon, dtype=float)
    geo_x = WORLD_RADIUS * ((lon_a * np.pi) / 180.0)
    geo_y = WORLD_RADIUS * np.log(np.tan(np.pi * ((lat_c + 90.0) / 360.0)))
    x = np.clip((geo_x / WORLD_SIZE) + 0.5, 0.0, 1.0)
    y = np.clip(1.0 - ((geo_y / WORLD_SIZE) + 0.5), 0.0, 1.0)
    return _as_result(x, lon), _as_result(y, lat)


def mercs_to_lat_lon(merc_x, merc_y) -> Tuple:
    """Inverse of `lat_lon_to_mercs`. Returns (lat, lon).

    Raises:
        ValueError: if a coordinate lies outside [0, 1].
    """
    x = np.asarray(merc_x, dtype=float)
    y = np.asarray(merc_y, dtype=float)
    if np.any((x < 0.0) | (x > 1.0) | (y < 0.0) | (y > 1.0)):
        raise ValueError(f"Mercator coordinates must be in [0, 1]: {merc_x}, {merc_y}")
    geo_x = (x - 0.5) * WORLD_SIZE
    geo_y = (y - 0.5) * -WORLD_SIZE
    lat = ((np.arctan(np.exp(geo_y / WORLD_RADIUS)) / np.pi) * 360.0) - 90.0
    lon = ((geo_x / WORLD_RADIUS) / np.pi) * 180.0
    return _as_result(lat, merc_y), _as_result(lon, merc_x)


@dataclass(frozen=True)
class MercatorPoint:
    """
    A normalized Mercator position.

    Attributes:
        x: 0 at lon -180, 1 at lon 180
        y: 0 at the northern cut-off, 1 at the southern one
    """

    x: float
    y: float

    def __post_init__(self):
        if not is_between(self.x, 0.0, 1.0) or not is_between(self.y, 0.0, 1.0):
            raise ValueError(f"Mercator coordinates must be in [0, 1]: ({self.x}, {self.y})")
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def from_point(cls, point: Point) -> MercatorPoint:
        return cls(*lat_lon_to_mercs(point.lat, point.lon))

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> MercatorPoint:
        return cls.from_point(Point(lat, lon))

    def to_point(self) -> Point:
        lat, lon = mercs_to_lat_lon(self.x, self.y)
        return Point(lat, lon)
