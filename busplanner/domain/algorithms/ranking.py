from __future__ import annotations

from typing import Iterable

from busplanner.domain.models import Itinerary


def ranking_key(itinerary: Itinerary) -> tuple[float, int, float]:
    return (
        itinerary.total_walking_m,
        itinerary.transfer_count,
        itinerary.total_distance_m,
    )


def rank_itineraries(candidates: Iterable[Itinerary]) -> list[Itinerary]:
    """Least walking first, then fewer transfers, then shorter overall.

    `sorted` is stable, so equal keys keep their discovery order. Near
    duplicates are kept as-is.
    """

    return sorted(candidates, key=ranking_key)
