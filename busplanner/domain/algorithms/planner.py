from __future__ import annotations

import logging
from itertools import permutations
from typing import Callable, Iterable, Iterator, Sequence

from busplanner.domain.exceptions import InputError, MalformedEntryError
from busplanner.domain.models import GeoPoint, Itinerary, TransitCatalog, TransitLine

from .direct import find_direct_route, walking_itinerary
from .double_transfer import find_double_transfer_route
from .limits import DEFAULT_LIMITS, SearchLimits
from .ranking import rank_itineraries
from .single_transfer import find_single_transfer_route

logger = logging.getLogger(__name__)

StopCheck = Callable[[], bool]
DoubleTransferSearch = Callable[
    [TransitLine, TransitLine, TransitLine, GeoPoint, GeoPoint, SearchLimits],
    "Itinerary | None",
]


def _never() -> bool:
    return False


class _StopLatch:
    """Remembers whether the stop check has fired; it never un-fires."""

    __slots__ = ("_check", "fired")

    def __init__(self, check: StopCheck) -> None:
        self._check = check
        self.fired = False

    def __call__(self) -> bool:
        if not self.fired and self._check():
            self.fired = True
        return self.fired


def _describe(lines: Sequence[TransitLine]) -> str:
    return " -> ".join(str(getattr(line, "line_id", "?")) for line in lines)


def _lines_with_stops(lines: Sequence[TransitLine]) -> list[TransitLine]:
    """Drop stopless lines up front so each one is reported only once."""

    usable: list[TransitLine] = []
    for line in lines:
        if getattr(line, "stops", None):
            usable.append(line)
        else:
            logger.warning(
                "Skipping line %r: no stops", getattr(line, "line_id", "?")
            )
    return usable


def _distinct_line_chains(
    lines: Sequence[TransitLine], length: int
) -> Iterator[tuple[TransitLine, ...]]:
    """Ordered chains of `length` lines, no line id used twice."""

    for chain in permutations(lines, length):
        if len({line.line_id for line in chain}) == length:
            yield chain


def _search_tier(
    tier: str,
    chains: Iterable[Sequence[TransitLine]],
    evaluate: Callable[..., Itinerary | None],
    should_stop: StopCheck,
) -> Iterator[Itinerary]:
    """Evaluate every chain of lines, isolating failures per chain."""

    for chain in chains:
        if should_stop():
            return
        try:
            itinerary = evaluate(*chain)
        except MalformedEntryError as exc:
            logger.warning("Skipping %s search for %s: %s", tier, _describe(chain), exc)
            continue
        except Exception:
            logger.exception("Failed %s search for %s", tier, _describe(chain))
            continue

        if itinerary is not None:
            logger.debug(
                "Found %s itinerary via %s (walk=%.0fm, total=%.0fm)",
                tier,
                _describe(chain),
                itinerary.total_walking_m,
                itinerary.total_distance_m,
            )
            yield itinerary


def needs_double_transfer_fallback(
    candidates: Sequence[Itinerary], limits: SearchLimits = DEFAULT_LIMITS
) -> bool:
    """True when nothing found so far keeps walking within the threshold."""

    return not candidates or all(
        c.total_walking_m > limits.max_walking_m for c in candidates
    )


def plan_itineraries(
    catalog: TransitCatalog,
    origin: GeoPoint,
    destination: GeoPoint,
    *,
    limits: SearchLimits = DEFAULT_LIMITS,
    should_stop: StopCheck | None = None,
    double_transfer_search: DoubleTransferSearch = find_double_transfer_route,
) -> list[Itinerary]:
    """Compute and rank walk + bus itineraries from origin to destination.

    Tiers run in order: walking only, one line, two lines (one transfer), and
    three lines (two transfers). The last tier is a fallback and only runs when
    no earlier candidate keeps walking within `limits.max_walking_m`.

    `should_stop` is polled between outer iterations of every tier; once it
    returns True the search ends and whatever was found is ranked and returned.

    An empty list means no itinerary satisfies the thresholds.
    """

    if catalog is None:
        raise InputError("A transit catalog is required")
    if not isinstance(catalog, TransitCatalog):
        raise InputError(f"Expected a TransitCatalog, got {type(catalog).__name__}")
    if not isinstance(origin, GeoPoint) or not isinstance(destination, GeoPoint):
        raise InputError("Origin and destination must be GeoPoint values")

    stop = _StopLatch(should_stop or _never)
    lines = _lines_with_stops(catalog.lines)
    logger.debug(
        "Planning from %s to %s over %d line(s)", origin, destination, len(lines)
    )

    candidates: list[Itinerary] = []

    walk = walking_itinerary(origin, destination, limits)
    if walk is not None:
        logger.debug(
            "Destination within walking distance (%.0fm)", walk.total_walking_m
        )
        candidates.append(walk)

    def _direct(line: TransitLine) -> Itinerary | None:
        return find_direct_route(line, origin, destination, limits)

    def _single(first: TransitLine, second: TransitLine) -> Itinerary | None:
        return find_single_transfer_route(first, second, origin, destination, limits)

    def _double(
        first: TransitLine, second: TransitLine, third: TransitLine
    ) -> Itinerary | None:
        return double_transfer_search(first, second, third, origin, destination, limits)

    singles = ((line,) for line in lines)
    candidates.extend(_search_tier("direct", singles, _direct, stop))

    if limits.max_transfers >= 1 and not stop():
        candidates.extend(
            _search_tier(
                "single-transfer", _distinct_line_chains(lines, 2), _single, stop
            )
        )

    if (
        limits.max_transfers >= 2
        and needs_double_transfer_fallback(candidates, limits)
        and not stop()
    ):
        logger.debug("No walkable itinerary yet, searching with two transfers")
        candidates.extend(
            _search_tier(
                "double-transfer", _distinct_line_chains(lines, 3), _double, stop
            )
        )

    if stop.fired:
        logger.warning(
            "Itinerary search stopped early; ranking %d candidate(s) found so far",
            len(candidates),
        )

    ranked = rank_itineraries(candidates)
    logger.info("Found %d itinerary(ies)", len(ranked))
    return ranked
