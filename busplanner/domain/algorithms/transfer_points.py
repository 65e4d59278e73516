from __future__ import annotations

from typing import NamedTuple

from busplanner.domain.models import TransitLine

from .geo_utils import haversine_distance_m
from .limits import DEFAULT_LIMITS, SearchLimits


class TransferPoint(NamedTuple):
    """A stop on one line close enough to a stop on another to walk across."""

    from_index: int
    to_index: int
    distance_m: float


def build_transfer_points(
    from_line: TransitLine,
    to_line: TransitLine,
    limits: SearchLimits = DEFAULT_LIMITS,
) -> list[TransferPoint]:
    """All stop pairs (from_line stop, to_line stop) within transfer distance.

    Ordered by (from_index, to_index); built once per line pair so the nested
    search loops never recompute pairwise distances.
    """

    points: list[TransferPoint] = []
    for i, a in enumerate(from_line.stops):
        for k, b in enumerate(to_line.stops):
            d = haversine_distance_m(a.location, b.location)
            if d <= limits.max_transfer_m:
                points.append(TransferPoint(from_index=i, to_index=k, distance_m=d))
    return points
