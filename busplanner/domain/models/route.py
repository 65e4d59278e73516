from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .geo import GeoPoint


class TravelMode(str, Enum):
    WALK = "walk"
    BUS = "bus"


@dataclass(frozen=True, slots=True)
class Stop:
    """A bus stop as listed on one line.

    Ids are only unique within their line; a stop served by two lines appears
    once per line.
    """

    id: str
    name: str
    location: GeoPoint


@dataclass(frozen=True, slots=True)
class TransitLine:
    """A bus line: an ordered sequence of stops in travel direction."""

    line_id: str
    name: str | None = None
    stops: tuple[Stop, ...] = ()
    color: str | None = None  # hex without '#'
    mode: TravelMode = TravelMode.BUS

    @property
    def display_name(self) -> str:
        return self.name or f"Bus {self.line_id}"


# Synthetic line used for itineraries that never board a bus.
WALKING_LINE = TransitLine(line_id="walk", name="Walking", mode=TravelMode.WALK)


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """One leg of an itinerary: travel along `line` from `start` to `end`.

    Walking to the boarding stop and from the alighting stop is carried on the
    segment itself. On a transfer the walk between the two stops is split in
    half between the adjacent segments.
    """

    line: TransitLine
    start: GeoPoint
    end: GeoPoint
    walk_to_start_m: float = 0.0
    walk_from_end_m: float = 0.0
    in_line_distance_m: float = 0.0
    start_stop: Stop | None = None
    end_stop: Stop | None = None

    @property
    def mode(self) -> TravelMode:
        return self.line.mode

    @property
    def total_distance_m(self) -> float:
        return self.walk_to_start_m + self.in_line_distance_m + self.walk_from_end_m


@dataclass(frozen=True, slots=True)
class Itinerary:
    origin: GeoPoint
    destination: GeoPoint
    segments: tuple[RouteSegment, ...] = field(default_factory=tuple)
    total_walking_m: float = 0.0
    total_transit_m: float = 0.0
    transfer_count: int = 0

    @property
    def total_distance_m(self) -> float:
        return self.total_walking_m + self.total_transit_m

    @property
    def is_walking_only(self) -> bool:
        return all(seg.mode is TravelMode.WALK for seg in self.segments)
