from __future__ import annotations

from typing import Iterator, NamedTuple

from busplanner.domain.models import (
    WALKING_LINE,
    GeoPoint,
    Itinerary,
    RouteSegment,
    TransitLine,
)

from .geo_utils import haversine_distance_m
from .limits import DEFAULT_LIMITS, SearchLimits
from .segments import (
    in_line_distance_m,
    require_stops,
    ride_segment,
    walk_distances_m,
)


class _DirectCandidate(NamedTuple):
    total_m: float
    walking_m: float
    board: int
    alight: int
    walk_in_m: float
    ride_m: float
    walk_out_m: float


def walking_itinerary(
    origin: GeoPoint, destination: GeoPoint, limits: SearchLimits = DEFAULT_LIMITS
) -> Itinerary | None:
    """All-walking itinerary, offered whenever the destination is walkable."""

    distance_m = haversine_distance_m(origin, destination)
    if distance_m > limits.max_walking_m:
        return None

    # The walk is the travel along the synthetic walking line.
    segment = RouteSegment(
        line=WALKING_LINE,
        start=origin,
        end=destination,
        in_line_distance_m=distance_m,
    )
    return Itinerary(
        origin=origin,
        destination=destination,
        segments=(segment,),
        total_walking_m=distance_m,
        total_transit_m=0.0,
        transfer_count=0,
    )


def _direct_candidates(
    line: TransitLine, origin: GeoPoint, destination: GeoPoint, limits: SearchLimits
) -> Iterator[_DirectCandidate]:
    to_origin = walk_distances_m(line, origin)
    to_destination = walk_distances_m(line, destination)
    n = len(line.stops)

    for i in range(n):
        if to_origin[i] > limits.max_walking_m:
            continue
        for j in range(i, n):
            if to_destination[j] > limits.max_walking_m:
                continue
            ride_m = in_line_distance_m(line, i, j)
            yield _DirectCandidate(
                total_m=to_origin[i] + ride_m + to_destination[j],
                walking_m=to_origin[i] + to_destination[j],
                board=i,
                alight=j,
                walk_in_m=to_origin[i],
                ride_m=ride_m,
                walk_out_m=to_destination[j],
            )


def find_direct_route(
    line: TransitLine,
    origin: GeoPoint,
    destination: GeoPoint,
    limits: SearchLimits = DEFAULT_LIMITS,
) -> Itinerary | None:
    """Best zero-transfer itinerary on a single line.

    Every (board, alight) pair with board <= alight whose stops are both within
    walking distance of the origin/destination is scored by
    walk + ride + walk. The cheapest wins; equal totals go to the one with less
    walking, then to the first enumerated.
    O(n^2) pairs per line.
    """

    require_stops(line)

    best = min(
        _direct_candidates(line, origin, destination, limits),
        key=lambda c: (c.total_m, c.walking_m),
        default=None,
    )
    if best is None:
        return None

    segment = ride_segment(
        line,
        best.board,
        best.alight,
        walk_to_start_m=best.walk_in_m,
        walk_from_end_m=best.walk_out_m,
        in_line_m=best.ride_m,
    )
    return Itinerary(
        origin=origin,
        destination=destination,
        segments=(segment,),
        total_walking_m=best.walking_m,
        total_transit_m=best.ride_m,
        transfer_count=0,
    )
