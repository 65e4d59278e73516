from .local_catalog_repository import LocalCatalogRepository
from .s3_catalog_repository import S3CatalogRepository

__all__ = [
    "LocalCatalogRepository",
    "S3CatalogRepository",
]
