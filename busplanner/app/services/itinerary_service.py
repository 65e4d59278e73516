from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from busplanner.app.ports.output import ICatalogRepository
from busplanner.domain.algorithms.limits import DEFAULT_LIMITS, SearchLimits
from busplanner.domain.algorithms.planner import plan_itineraries
from busplanner.domain.models import GeoPoint, Itinerary, TransitLine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ItineraryService:
    """Application service (use case) for itinerary planning.

    Loads the catalog through its port and runs the pure planner over it.
    The planner itself never does I/O.
    """

    catalog_repository: ICatalogRepository

    # Wall-clock budget for one planning call; None means unbounded.
    time_budget_s: float | None = None
    limits: SearchLimits = DEFAULT_LIMITS
    clock: Callable[[], float] = time.monotonic

    def plan(
        self,
        *,
        origin: GeoPoint,
        destination: GeoPoint,
        max_results: int | None = None,
    ) -> list[Itinerary]:
        catalog = self.catalog_repository.load_catalog()
        logger.debug("Loaded catalog with %d line(s)", len(catalog))

        itineraries = plan_itineraries(
            catalog,
            origin,
            destination,
            limits=self.limits,
            should_stop=self._deadline_check(),
        )
        if max_results is not None:
            itineraries = itineraries[: max(0, int(max_results))]
        return itineraries

    def list_lines(self) -> tuple[TransitLine, ...]:
        return self.catalog_repository.load_catalog().lines

    def _deadline_check(self) -> Callable[[], bool] | None:
        if self.time_budget_s is None:
            return None

        clock = self.clock
        deadline = clock() + float(self.time_budget_s)

        def _expired() -> bool:
            return clock() >= deadline

        return _expired
