from __future__ import annotations

from abc import ABC, abstractmethod

from busplanner.domain.models import TransitCatalog


class ICatalogRepository(ABC):
    """Port for loading the bus network (lines and their ordered stops)."""

    @abstractmethod
    def load_catalog(self) -> TransitCatalog:
        raise NotImplementedError
