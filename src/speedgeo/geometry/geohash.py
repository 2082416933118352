"""
geohash.py

Geohash codec: a point is encoded by narrowing the latitude range [-90, 90]
and the longitude range [-180, 180] bit by bit, interleaving the bits
(longitude first) and rendering them in base 32.

The hash length determines the resolution. A hash that is a prefix of another
hash denotes a cell that contains the other one.

Usage:
    from speedgeo.geometry.geohash import GeoHash, encode, decode

    encode(52.3765, 4.908)                      # 'u173zwvghxq0'
    GeoHash.from_hash('u173').point             # center of the cell
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple

from speedgeo.geometry.config import GEOHASH, LAT_MAX, LAT_MIN, LON180, LON_MAX, LON_MIN
from speedgeo.geometry.primitives import Point

logger = logging.getLogger(__name__)

ALPHABET = GEOHASH['alphabet']
BITS_PER_CHAR = GEOHASH['bits_per_char']
BITS_PER_AXIS = GEOHASH['bits_per_axis']

# character -> 5 bit value
LOOKUP = MappingProxyType({c: i for i, c in enumerate(ALPHABET)})


def _narrow(value: float, low: float, high: float, n_bits: int) -> int:
    # binary search; a value on the midpoint goes to the upper half
    bits = 0
    for _ in range(n_bits):
        mid = (low + high) / 2.0
        if value >= mid:
            bits = (bits << 1) | 1
            low = mid
        else:
            bits <<= 1
            high = mid
    return bits


def _widen(bits: list, low: float, high: float) -> float:
    for bit in bits:
        mid = (low + high) / 2.0
        if bit:
            low = mid
        else:
            high = mid
    return (low + high) / 2.0


def encode(lat: float, lon: float, bits_per_axis: int = BITS_PER_AXIS) -> str:
    """Encode a latitude and longitude as a geohash.

    Args:
        lat: latitude in [-90, 90]
        lon: longitude in [-180, 180)
        bits_per_axis: resolution per axis, a positive multiple of 5

    Returns:
        Geohash of 2 * bits_per_axis / 5 characters.
    """
    if bits_per_axis <= 0 or bits_per_axis % BITS_PER_CHAR != 0:
        raise ValueError(f"bits_per_axis must be a positive multiple of 5, got {bits_per_axis}")

    lat_bits = _narrow(lat, LAT_MIN, LAT_MAX, bits_per_axis)
    lon_bits = _narrow(lon, LON_MIN, LON_MAX, bits_per_axis)

    value = 0
    for i in range(bits_per_axis - 1, -1, -1):
        value = (value << 2) | (((lon_bits >> i) & 1) << 1) | ((lat_bits >> i) & 1)

    n_chars = (2 * bits_per_axis) // BITS_PER_CHAR
    return ''.join(
        ALPHABET[(value >> (BITS_PER_CHAR * k)) & 0x1f]
        for k in range(n_chars - 1, -1, -1))


def decode(hash: str) -> Point:
    """Decode a geohash to the center of its cell."""
    if not is_valid(hash):
        raise ValueError(f"Invalid geohash: {hash!r}")

    bits = []
    for c in hash:
        v = LOOKUP[c]
        bits.extend((v >> k) & 1 for k in range(BITS_PER_CHAR - 1, -1, -1))

    # even bits are longitude, odd bits latitude
    lon = _widen(bits[0::2], LON_MIN, LON_MAX)
    lat = _widen(bits[1::2], LAT_MIN, LAT_MAX)
    return Point(lat, lon)


def is_valid(hash: Optional[str]) -> bool:
    """True for a non-empty string over the geohash alphabet."""
    if not isinstance(hash, str) or not hash:
        return False
    return all(c in LOOKUP for c in hash)


def bounds(hash: str) -> Tuple[Point, Point]:
    """South-west and north-east corner of the cell of a geohash.

    The eastern edge of the last column is LON180, so the corners never wrap.
    """
    if not is_valid(hash):
        raise ValueError(f"Invalid geohash: {hash!r}")
    center = decode(hash)
    n_bits = len(hash) * BITS_PER_CHAR
    half_lat = (LAT_MAX - LAT_MIN) / 2.0 ** (n_bits // 2) / 2.0
    half_lon = (LON_MAX - LON_MIN) / 2.0 ** ((n_bits + 1) // 2) / 2.0
    return (
        Point(center.lat - half_lat, center.lon - half_lon),
        Point(center.lat + half_lat, min(center.lon + half_lon, LON180)))


@dataclass(frozen=True)
class GeoHash:
    """
    A geohash together with the point it stands for.

    Built from a point, the point is kept as is. Built from a hash, the point
    is the center of the cell.

    Attributes:
        hash: geohash string, never empty
        point: Point
    """

    hash: str
    point: Point

    def __post_init__(self):
        if not is_valid(self.hash):
            raise ValueError(f"Invalid geohash: {self.hash!r}")

    @classmethod
    def from_point(cls, point: Point) -> GeoHash:
        return cls(encode(point.lat, point.lon), point)

    @classmethod
    def from_hash(cls, hash: str) -> GeoHash:
        return cls(hash, decode(hash))

    def __len__(self) -> int:
        return len(self.hash)

    def __str__(self) -> str:
        return self.hash

    def contains(self, other: GeoHash) -> bool:
        """True if the cell of `other` lies within this cell."""
        return other.hash.startswith(self.hash)

    def decrease_resolution(self, amount: int = 1) -> Optional[GeoHash]:
        """Drop `amount` characters, or None if nothing would be left."""
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        if amount >= len(self.hash):
            return None
        return GeoHash.from_hash(self.hash[:len(self.hash) - amount])

    def set_resolution(self, length: int) -> GeoHash:
        """Truncate to `length` characters. A hash is never extended."""
        if length <= 0:
            raise ValueError(f"length must be > 0, got {length}")
        if length > len(self.hash):
            logger.debug("geohash %s shorter than %d, resolution kept", self.hash, length)
        return GeoHash.from_hash(self.hash[:length])

    def use_resolution(self, other: GeoHash) -> GeoHash:
        """Truncate to the resolution of `other`."""
        return self.set_resolution(len(other.hash))

    def move_to(self, point: Point) -> GeoHash:
        """Geohash of `point` at the resolution of this hash."""
        return GeoHash.from_point(point).set_resolution(len(self.hash))
