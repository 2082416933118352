"""
trace.py

GPS traces: ordered, immutable sequences of timestamped positions.

`limit_size` keeps a trace bounded in both length and age, which is how a
trace is maintained while new fixes stream in:

    points = limit_size(timedelta(seconds=10), 100, trace.points, new_point)
    trace = GpsTrace(points)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from speedgeo.geometry.primitives import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GpsTracePoint:
    """A position with the time it was recorded."""

    time: datetime
    position: Point

    def with_time(self, time: datetime) -> GpsTracePoint:
        return GpsTracePoint(time, self.position)

    def with_position(self, position: Point) -> GpsTracePoint:
        return GpsTracePoint(self.time, position)


@dataclass(frozen=True)
class GpsTrace:
    """
    An immutable list of trace points, oldest first.

    Attributes:
        points: tuple of GpsTracePoint; any iterable is accepted
    """

    points: Tuple[GpsTracePoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def with_points(self, *points: GpsTracePoint) -> GpsTrace:
        """A trace of exactly the given points. The current points are not kept."""
        return GpsTrace(points)

    def last_point(self) -> Optional[GpsTracePoint]:
        """Most recent point, or None for an empty trace."""
        if not self.points:
            return None
        return self.points[-1]


def limit_size(
        max_age: timedelta,
        max_size: int,
        points: Iterable[GpsTracePoint],
        *extra: GpsTracePoint) -> List[GpsTracePoint]:
    """Keep the last `max_size` points that are at most `max_age` older than the newest.

    Args:
        max_age: oldest allowed age relative to the newest kept point
        max_size: maximum number of points, >= 0
        points: existing points, oldest first
        *extra: points appended after `points`

    Returns:
        New list, oldest first.
    """
    if max_size < 0:
        raise ValueError(f"max_size must be >= 0, got {max_size}")

    full = list(points) + list(extra)
    kept = full[max(0, len(full) - max_size):]
    if not kept:
        return []

    oldest = kept[-1].time - max_age
    recent = [p for p in kept if p.time >= oldest]
    if len(recent) < len(kept):
        logger.debug("dropped %d trace points older than %s", len(kept) - len(recent), oldest)
    return recent
