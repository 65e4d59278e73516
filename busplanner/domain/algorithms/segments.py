from __future__ import annotations

from busplanner.domain.exceptions import MalformedEntryError
from busplanner.domain.models import GeoPoint, RouteSegment, TransitLine

from .geo_utils import haversine_distance_m, polyline_distance_m


def require_stops(line: TransitLine, minimum: int = 1) -> None:
    if len(line.stops) < minimum:
        raise MalformedEntryError(
            f"Line {line.line_id!r} has {len(line.stops)} stop(s), "
            f"at least {minimum} required"
        )


def in_line_distance_m(line: TransitLine, start_index: int, end_index: int) -> float:
    """Distance travelled along `line` from stop `start_index` to `end_index`.

    Sum of the great-circle distances between consecutive stops. Lines are
    one-directional, so `start_index > end_index` is a caller bug.
    """

    n = len(line.stops)
    if n == 0:
        return 0.0
    if not (0 <= start_index <= end_index < n):
        raise ValueError(
            f"Invalid stop indices ({start_index}, {end_index}) "
            f"for line {line.line_id!r} with {n} stops"
        )
    if start_index == end_index:
        return 0.0
    return polyline_distance_m(
        stop.location for stop in line.stops[start_index : end_index + 1]
    )


def walk_distances_m(line: TransitLine, point: GeoPoint) -> list[float]:
    """Walking distance from `point` to every stop of `line`, by stop index."""

    return [haversine_distance_m(point, stop.location) for stop in line.stops]


def ride_segment(
    line: TransitLine,
    board: int,
    alight: int,
    *,
    walk_to_start_m: float,
    walk_from_end_m: float,
    in_line_m: float,
) -> RouteSegment:
    board_stop = line.stops[board]
    alight_stop = line.stops[alight]
    return RouteSegment(
        line=line,
        start=board_stop.location,
        end=alight_stop.location,
        walk_to_start_m=walk_to_start_m,
        walk_from_end_m=walk_from_end_m,
        in_line_distance_m=in_line_m,
        start_stop=board_stop,
        end_stop=alight_stop,
    )
