from .catalog import TransitCatalog
from .geo import GeoPoint
from .route import (
    WALKING_LINE,
    Itinerary,
    RouteSegment,
    Stop,
    TransitLine,
    TravelMode,
)

__all__ = [
    "GeoPoint",
    "Itinerary",
    "RouteSegment",
    "Stop",
    "TransitCatalog",
    "TransitLine",
    "TravelMode",
    "WALKING_LINE",
]
