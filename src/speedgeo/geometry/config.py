# -*- coding: utf-8 -*-

"""
geometry/config.py

This module centralizes the constants used by the speedgeo geometry package.
By keeping the Earth model, the travel-time table and the geohash defaults in
one place, conversions, areas and the geohash codec all agree on the same
numbers.

Contents:
---------
1. EARTH:
   - WGS84 equatorial and polar radii, and the circumferences derived from them.
   - The model is planar per degree: one degree of latitude is a fixed number of
     meters, one degree of longitude is that number at the equator scaled by
     cos(latitude).

2. LON180:
   - Almost, but not quite, longitude 180 (which wraps to -180). Used as the
     eastern edge of rectangles that touch the antimeridian.

3. CROW_FLIGHT_SPEED_TABLE:
   - (from_km, max_kmh) pairs. The max speed is valid from `from_km` until the
     next entry's `from_km`. The last band is open ended.

4. GEOHASH:
   - Alphabet and default resolution of the geohash codec.

5. MERCATOR:
   - Spherical Mercator world size and radius, and the latitude band that the
     projection is cut off at.

Usage:
------
    from speedgeo.geometry.config import METERS_PER_DEGREE_LAT, GEOHASH

"""
import math

# ───────────────────────────────────────────────────────────────────────────────
# 1) EARTH MODEL (meters)
# ───────────────────────────────────────────────────────────────────────────────
EARTH = {
    'radius_x_m': 6378137.0,        # equatorial radius, WGS84
    'radius_y_m': 6356752.3142,     # polar radius, WGS84
}

EARTH_RADIUS_X_METERS = EARTH['radius_x_m']
EARTH_RADIUS_Y_METERS = EARTH['radius_y_m']

EARTH_CIRCUMFERENCE_X = EARTH_RADIUS_X_METERS * 2.0 * math.pi
EARTH_CIRCUMFERENCE_Y = EARTH_RADIUS_Y_METERS * 2.0 * math.pi

# Meters per degree latitude is fixed; for longitude multiply by cos(lat).
METERS_PER_DEGREE_LAT = EARTH_CIRCUMFERENCE_Y / 360.0
METERS_PER_DEGREE_LON_EQUATOR = EARTH_CIRCUMFERENCE_X / 360.0

# ───────────────────────────────────────────────────────────────────────────────
# 2) COORDINATE LIMITS (degrees)
# ───────────────────────────────────────────────────────────────────────────────
LAT_MIN = -90.0
LAT_MAX = 90.0
LON_MIN = -180.0
LON_MAX = 180.0
LON180 = 179.999999999999

# Vector components, degrees
NORTHING_LIMIT = 180.0
EASTING_LIMIT = 360.0

# ───────────────────────────────────────────────────────────────────────────────
# 3) TRAVEL TIME ESTIMATE
# ───────────────────────────────────────────────────────────────────────────────
CROW_FLIGHT_SPEED_TABLE = (
    (0.0, 15.0),      #   0 ..   1 km  -> 15 km/h
    (1.0, 20.0),      #   1 ..   2 km  -> 20 km/h
    (2.0, 30.0),      #   2 ..   3 km  -> 30 km/h
    (3.0, 35.0),      #   3 ..   4 km  -> 35 km/h
    (4.0, 40.0),      #   4 ..   6 km  -> 40 km/h
    (6.0, 45.0),      #   6 ..  10 km  -> 45 km/h
    (10.0, 50.0),     #  10 ..  15 km  -> 50 km/h
    (15.0, 60.0),     #  15 ..  25 km  -> 60 km/h
    (25.0, 65.0),     #  25 ..  50 km  -> 65 km/h
    (50.0, 70.0),     #  50 .. 100 km  -> 70 km/h
    (100.0, 90.0),    # > 100 km       -> 90 km/h
)

# ───────────────────────────────────────────────────────────────────────────────
# 4) GEOHASH
# ───────────────────────────────────────────────────────────────────────────────
GEOHASH = {
    # 32 symbols; a, i, l and o are left out to avoid visual ambiguity
    'alphabet': '0123456789bcdefghjkmnpqrstuvwxyz',
    'bits_per_char': 5,
    # 30 bits per axis -> 60 interleaved bits -> 12 characters
    'bits_per_axis': 30,
}

# ───────────────────────────────────────────────────────────────────────────────
# 5) MERCATOR (spherical, normalized to 0..1)
# ───────────────────────────────────────────────────────────────────────────────
MERCATOR = {
    'world_size_m': 20037508.34278913 * 2.0,   # width of the projected world
    'world_radius_m': 6378137.0,
    # poles project to infinity; clamp before projecting
    'lat_min': -85.0,
    'lat_max': 85.0,
}
