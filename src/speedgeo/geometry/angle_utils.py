"""Small utilities for longitude wrapping and latitude clamping.

Keep these dependency-light (numpy only) so tests and the primitives can
import them without pulling in the area algebra.
"""
import numpy as np

from speedgeo.geometry.config import LAT_MAX, LAT_MIN


def _as_result(arr, original):
    # scalars in, floats out; arrays in, arrays out
    if np.ndim(original) == 0:
        return float(arr)
    return arr


def map_to_lon(value):
    """Map a longitude to [-180, 180).

    Values inside the range come back unchanged. Values outside it are
    wrapped, with the fold taken symmetrically around zero, so -200 maps to 160
    and 200 maps to -160. A result of exactly 180 is remapped to -180.

    Accepts scalars or numpy arrays; returns a float or a same-shaped array.
    """
    v = np.asarray(value, dtype=float)
    sign = np.where(v >= 0.0, 1.0, -1.0)
    folded = ((np.abs(v) + 180.0) % 360.0 - 180.0) * sign
    folded = np.where(folded == 180.0, -180.0, folded)
    lon = np.where((v >= -180.0) & (v < 180.0), v, folded)
    return _as_result(lon, value)


def map_to_lat(value):
    """Constrain a latitude to [-90, 90].

    Values outside this range are cut off to the pole latitudes.
    """
    v = np.asarray(value, dtype=float)
    return _as_result(np.clip(v, LAT_MIN, LAT_MAX), value)


def easting_deg(west_lon, east_lon):
    """Eastward angular span from `west_lon` to `east_lon`, in [0, 360).

    If `east_lon` lies west of `west_lon` the span runs across the
    antimeridian.
    """
    w = np.asarray(west_lon, dtype=float)
    e = np.asarray(east_lon, dtype=float)
    span = np.where(e >= w, e - w, 360.0 + (e - w))
    return _as_result(span, west_lon)


def shortest_lon_delta_deg(lon1, lon2):
    """Absolute longitude difference along the shorter way round, in [0, 180]."""
    a = np.asarray(lon1, dtype=float)
    b = np.asarray(lon2, dtype=float)
    delta = np.where(a > b, 360.0 - (a - b), b - a)
    delta = np.where(delta > 180.0, 360.0 - delta, delta)
    return _as_result(delta, lon1)
