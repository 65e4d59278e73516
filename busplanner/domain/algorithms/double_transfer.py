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


class _DoubleTransferCandidate(NamedTuple):
    total_m: float
    walking_m: float
    board: int
    first_transfer: TransferPoint
    second_transfer: TransferPoint
    alight: int
    walk_in_m: float
    rides_m: tuple[float, float, float]
    walk_out_m: float


def _double_transfer_candidates(
    first: TransitLine,
    second: TransitLine,
    third: TransitLine,
    first_transfers: Sequence[TransferPoint],
    second_transfers: Sequence[TransferPoint],
    origin: GeoPoint,
    destination: GeoPoint,
    limits: SearchLimits,
) -> Iterator[_DoubleTransferCandidate]:
    to_origin = walk_distances_m(first, origin)
    to_destination = walk_distances_m(third, destination)

    for i, walk_in_m in enumerate(to_origin):
        if walk_in_m > limits.max_walking_m:
            continue
        for ab in first_transfers:
            if ab.from_index < i:
                continue
            first_ride_m = in_line_distance_m(first, i, ab.from_index)
            for bc in second_transfers:
                # The middle ride must go forward along `second`.
                if ab.to_index > bc.from_index:
                    continue
                second_ride_m = in_line_distance_m(second, ab.to_index, bc.from_index)
                for p in range(bc.to_index, len(third.stops)):
                    walk_out_m = to_destination[p]
                    if walk_out_m > limits.max_walking_m:
                        continue
                    third_ride_m = in_line_distance_m(third, bc.to_index, p)
                    walking_m = walk_in_m + ab.distance_m + bc.distance_m + walk_out_m
                    yield _DoubleTransferCandidate(
                        total_m=walking_m + first_ride_m + second_ride_m + third_ride_m,
                        walking_m=walking_m,
                        board=i,
                        first_transfer=ab,
                        second_transfer=bc,
                        alight=p,
                        walk_in_m=walk_in_m,
                        rides_m=(first_ride_m, second_ride_m, third_ride_m),
                        walk_out_m=walk_out_m,
                    )


def find_double_transfer_route(
    first: TransitLine,
    second: TransitLine,
    third: TransitLine,
    origin: GeoPoint,
    destination: GeoPoint,
    limits: SearchLimits = DEFAULT_LIMITS,
) -> Itinerary | None:
    """Best itinerary chaining three lines with two walking transfers.

    Only used as a fallback tier; the search is combinatorial in the number of
    stops and transfer points of the three lines.
    """

    require_stops(first)
    require_stops(second)
    require_stops(third)

    first_transfers = build_transfer_points(first, second, limits)
    second_transfers = build_transfer_points(second, third, limits)
    if not first_transfers or not second_transfers:
        return None

    best = min(
        _double_transfer_candidates(
            first,
            second,
            third,
            first_transfers,
            second_transfers,
            origin,
            destination,
            limits,
        ),
        key=lambda c: (c.total_m, c.walking_m),
        default=None,
    )
    if best is None:
        return None

    ab = best.first_transfer
    bc = best.second_transfer
    first_ride_m, second_ride_m, third_ride_m = best.rides_m
    segments = (
        ride_segment(
            first,
            best.board,
            ab.from_index,
            walk_to_start_m=best.walk_in_m,
            walk_from_end_m=ab.distance_m / 2.0,
            in_line_m=first_ride_m,
        ),
        ride_segment(
            second,
            ab.to_index,
            bc.from_index,
            walk_to_start_m=ab.distance_m / 2.0,
            walk_from_end_m=bc.distance_m / 2.0,
            in_line_m=second_ride_m,
        ),
        ride_segment(
            third,
            bc.to_index,
            best.alight,
            walk_to_start_m=bc.distance_m / 2.0,
            walk_from_end_m=best.walk_out_m,
            in_line_m=third_ride_m,
        ),
    )
    return Itinerary(
        origin=origin,
        destination=destination,
        segments=segments,
        total_walking_m=best.walking_m,
        total_transit_m=first_ride_m + second_ride_m + third_ride_m,
        transfer_count=2,
    )
