"""
conversions.py

Degree <-> meter conversions and distance estimates on the locally planar
Earth model. These approximations work fine for relatively small distances,
say up to 200 km.

Public functions:
- `degrees_lat_to_meters(deg)` / `meters_to_degrees_lat(m)`
- `degrees_lon_to_meters_at_lat(deg, lat)` / `meters_to_degrees_lon_at_lat(m, lat)`
- `distance_in_meters(p1, p2)`
- `estimated_min_travel_time(from_point, to_point, round_to_meters=1)`

The four conversions accept scalars or numpy arrays.
"""
from __future__ import annotations

import math
from datetime import timedelta
from typing import TYPE_CHECKING

import numpy as np

from speedgeo.geometry.angle_utils import shortest_lon_delta_deg
from speedgeo.geometry.config import (
    CROW_FLIGHT_SPEED_TABLE,
    METERS_PER_DEGREE_LAT,
    METERS_PER_DEGREE_LON_EQUATOR,
)

if TYPE_CHECKING:
    from speedgeo.geometry.primitives import Point


def degrees_lat_to_meters(lat_degrees):
    """Convert degrees latitude to meters (independent of longitude)."""
    return lat_degrees * METERS_PER_DEGREE_LAT


def meters_to_degrees_lat(north_meters):
    """Convert meters pointing north to degrees latitude."""
    return north_meters / METERS_PER_DEGREE_LAT


def degrees_lon_to_meters_at_lat(lon_degrees, lat):
    """Convert degrees longitude to meters at the given latitude."""
    return lon_degrees * METERS_PER_DEGREE_LON_EQUATOR * np.cos(np.radians(lat))


def meters_to_degrees_lon_at_lat(east_meters, lat):
    """Convert meters pointing east to degrees longitude at the given latitude.

    Blows up towards the poles; that is a limitation of the model.
    """
    return (east_meters / METERS_PER_DEGREE_LON_EQUATOR) / np.cos(np.radians(lat))


def distance_in_meters(p1: Point, p2: Point) -> float:
    """Shortest distance between two points, in meters.

    The longitude delta is taken the short way round the Earth and converted
    at the midpoint latitude of the two points. The elevation difference is
    included when both points have an elevation.

    Returns:
        Distance, always >= 0.
    """
    delta_lon = shortest_lon_delta_deg(p1.lon, p2.lon)
    delta_lat = abs(p1.lat - p2.lat)

    avg_lat = p1.lat + ((p2.lat - p1.lat) / 2.0)

    dx = float(degrees_lon_to_meters_at_lat(delta_lon, avg_lat))
    dy = float(degrees_lat_to_meters(delta_lat))
    dz = p1.elevation_or_nan() - p2.elevation_or_nan()
    if math.isnan(dz):
        dz = 0.0

    return math.sqrt((dx * dx) + (dy * dy) + (dz * dz))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimated_min_travel_time(
    from_point: Point,
    to_point: Point,
    round_to_meters: int = 1,
) -> timedelta:
    """Best estimate of the minimum travel time from A to B.

    The distance is rounded to the nearest multiple of `round_to_meters`
    (0 is treated as 1) and then consumed band by band from
    `CROW_FLIGHT_SPEED_TABLE`, each band at its own max speed.

    Pure and local: no I/O, no lookups.

    Returns:
        Duration rounded to whole seconds.
    """
    if round_to_meters < 0:
        raise ValueError(f"round_to_meters must be >= 0, got {round_to_meters}")

    step = 1 if round_to_meters == 0 else round_to_meters
    distance = float(_round_half_up(distance_in_meters(from_point, to_point) / step) * step)

    total_secs = 0.0
    last = len(CROW_FLIGHT_SPEED_TABLE) - 1
    i = 0
    while distance > 0.0:
        from_km, max_kmh = CROW_FLIGHT_SPEED_TABLE[i]
        band_m = math.inf if i == last else (CROW_FLIGHT_SPEED_TABLE[i + 1][0] - from_km) * 1000.0
        m_per_s = (max_kmh * 1000.0) / 3600.0

        total_secs += min(distance, band_m) / m_per_s
        distance -= band_m
        i += 1

    return timedelta(seconds=_round_half_up(total_secs))
