class RoutingError(Exception):
    """Base exception for itinerary planning failures."""


class InputError(RoutingError, ValueError):
    """Raised when the planner is called without a usable catalog.

    An empty catalog is valid input; this is only for an absent or wrongly
    typed one.
    """


class MalformedEntryError(RoutingError):
    """Raised when a single catalog entry (line or stop) has an invalid shape.

    The planner skips the offending line, pair or triple and keeps searching.
    """


class CatalogConfigError(RoutingError, RuntimeError):
    """Raised when the catalog source is not configured (e.g. no bucket)."""
