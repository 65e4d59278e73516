from __future__ import annotations

import os
from functools import lru_cache

from busplanner.adapters.persistence.local_catalog_repository import (
    LocalCatalogRepository,
)
from busplanner.adapters.persistence.s3_catalog_repository import (
    S3CatalogRepository,
)
from busplanner.app.ports.output import ICatalogRepository
from busplanner.app.services.itinerary_service import ItineraryService


@lru_cache(maxsize=1)
def get_catalog_repository() -> ICatalogRepository:
    # Repositories cache the parsed catalog, so keep one per process.
    if os.getenv("CATALOG_BUCKET"):
        return S3CatalogRepository()
    return LocalCatalogRepository()


def get_itinerary_service() -> ItineraryService:
    service = ItineraryService(catalog_repository=get_catalog_repository())

    # Allow tuning via env without changing code.
    if os.getenv("PLANNER_TIME_BUDGET_S"):
        service.time_budget_s = float(os.environ["PLANNER_TIME_BUDGET_S"])

    return service
