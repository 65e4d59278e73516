from .routing import CatalogConfigError, InputError, MalformedEntryError, RoutingError

__all__ = ["CatalogConfigError", "InputError", "MalformedEntryError", "RoutingError"]
