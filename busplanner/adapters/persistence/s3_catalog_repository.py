from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from busplanner.adapters.aws import s3_client
from busplanner.app.ports.output import ICatalogRepository
from busplanner.domain.exceptions import CatalogConfigError
from busplanner.domain.models import TransitCatalog

from .catalog_codec import catalog_from_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class S3CatalogRepository(ICatalogRepository):
    """Catalog repository backed by a JSON object in S3.

    Env vars:
      - CATALOG_BUCKET: bucket name
      - CATALOG_KEY: object key (default: catalog/catalog.json)
      - ENDPOINT_URL: preferred LocalStack endpoint (e.g. http://localhost:4566)
      - USE_LOCALSTACK: 1|true to enable LocalStack (legacy toggle)
      - AWS_REGION: defaults to eu-west-1

    The parsed catalog is cached on the instance.
    """

    bucket: str | None = None
    key: str | None = None

    _catalog: TransitCatalog | None = None

    def _bucket(self) -> str:
        value = self.bucket or os.getenv("CATALOG_BUCKET")
        if not value:
            raise CatalogConfigError("Missing CATALOG_BUCKET")
        return value

    def _key(self) -> str:
        return self.key or os.getenv("CATALOG_KEY") or "catalog/catalog.json"

    def load_catalog(self) -> TransitCatalog:
        if self._catalog is not None:
            return self._catalog

        bucket = self._bucket()
        key = self._key()

        obj = s3_client().get_object(Bucket=bucket, Key=key)
        body = obj["Body"].read()

        self._catalog = catalog_from_json(body)
        logger.info(
            "Loaded catalog s3://%s/%s (%d line(s))", bucket, key, len(self._catalog)
        )
        return self._catalog
