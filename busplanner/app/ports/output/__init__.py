from .catalog_repository import ICatalogRepository

__all__ = [
    "ICatalogRepository",
]
