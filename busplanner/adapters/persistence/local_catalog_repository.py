from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from busplanner.app.ports.output import ICatalogRepository
from busplanner.domain.models import TransitCatalog

from .catalog_codec import catalog_from_json


@dataclass(slots=True)
class LocalCatalogRepository(ICatalogRepository):
    """Loads the bus catalog from a JSON file.

    Env vars:
      - CATALOG_PATH: path to the catalog JSON (default: data/catalog.json)
    """

    path: str | Path | None = None

    _catalog: TransitCatalog | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("CATALOG_PATH") or "data/catalog.json"
        return Path(value)

    def load_catalog(self) -> TransitCatalog:
        if self._catalog is not None:
            return self._catalog

        path = self._path()
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        self._catalog = catalog_from_json(path.read_bytes())
        return self._catalog
