from __future__ import annotations

from typing import Iterator, NamedTuple, Sequence

from busplanner.domain.models import GeoPoint, Itinerary, TransitLine

from .limits import DEFAULT_LIMITS, SearchLimits
from .segments import (
    in_line_distance_m,
    require_stops,
    ride_segment,
    walk_distances_m,
)
from .transfer_points import TransferPoint, build_transfer_points


class _TransferCandidate(NamedTuple):
    total_m: float
    walking_m: float
    board: int
    transfer: TransferPoint
    alight: int
    walk_in_m: float
    first_ride_m: float
    second_ride_m: float
    walk_out_m: float


def _single_transfer_candidates(
    first: TransitLine,
    second: TransitLine,
    transfers: Sequence[TransferPoint],
    origin: GeoPoint,
    destination: GeoPoint,
    limits: SearchLimits,
) -> Iterator[_TransferCandidate]:
    to_origin = walk_distances_m(first, origin)
    to_destination = walk_distances_m(second, destination)

    for i, walk_in_m in enumerate(to_origin):
        if walk_in_m > limits.max_walking_m:
            continue
        for tp in transfers:
            if tp.from_index < i:
                continue
            first_ride_m = in_line_distance_m(first, i, tp.from_index)
            for alight in range(tp.to_index, len(second.stops)):
                walk_out_m = to_destination[alight]
                if walk_out_m > limits.max_walking_m:
                    continue
                second_ride_m = in_line_distance_m(second, tp.to_index, alight)
                walking_m = walk_in_m + tp.distance_m + walk_out_m
                yield _TransferCandidate(
                    total_m=walking_m + first_ride_m + second_ride_m,
                    walking_m=walking_m,
                    board=i,
                    transfer=tp,
                    alight=alight,
                    walk_in_m=walk_in_m,
                    first_ride_m=first_ride_m,
                    second_ride_m=second_ride_m,
                    walk_out_m=walk_out_m,
                )


def find_single_transfer_route(
    first: TransitLine,
    second: TransitLine,
    origin: GeoPoint,
    destination: GeoPoint,
    limits: SearchLimits = DEFAULT_LIMITS,
    *,
    transfers: Sequence[TransferPoint] | None = None,
) -> Itinerary | None:
    """Best itinerary riding `first`, walking across, then riding `second`.

    Boarding stops on `first` must be walkable from the origin, alighting stops
    on `second` walkable to the destination, and the change of line goes
    through a precomputed transfer point. The transfer walk is reported half on
    each side of the change.
    """

    require_stops(first)
    require_stops(second)

    if transfers is None:
        transfers = build_transfer_points(first, second, limits)
    if not transfers:
        return None

    best = min(
        _single_transfer_candidates(
            first, second, transfers, origin, destination, limits
        ),
        key=lambda c: (c.total_m, c.walking_m),
        default=None,
    )
    if best is None:
        return None

    half_transfer_m = best.transfer.distance_m / 2.0
    segments = (
        ride_segment(
            first,
            best.board,
            best.transfer.from_index,
            walk_to_start_m=best.walk_in_m,
            walk_from_end_m=half_transfer_m,
            in_line_m=best.first_ride_m,
        ),
        ride_segment(
            second,
            best.transfer.to_index,
            best.alight,
            walk_to_start_m=half_transfer_m,
            walk_from_end_m=best.walk_out_m,
            in_line_m=best.second_ride_m,
        ),
    )
    return Itinerary(
        origin=origin,
        destination=destination,
        segments=segments,
        total_walking_m=best.walking_m,
        total_transit_m=best.first_ride_m + best.second_ride_m,
        transfer_count=1,
    )
