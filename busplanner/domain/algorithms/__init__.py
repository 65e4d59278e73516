from .direct import find_direct_route, walking_itinerary
from .double_transfer import find_double_transfer_route
from .geo_utils import haversine_distance_m
from .limits import (
    DEFAULT_LIMITS,
    MAX_TRANSFER_DISTANCE_M,
    MAX_TRANSFERS,
    MAX_WALKING_DISTANCE_M,
    SearchLimits,
)
from .planner import plan_itineraries
from .ranking import rank_itineraries
from .segments import in_line_distance_m
from .single_transfer import find_single_transfer_route
from .transfer_points import TransferPoint, build_transfer_points

__all__ = [
    "DEFAULT_LIMITS",
    "MAX_TRANSFERS",
    "MAX_TRANSFER_DISTANCE_M",
    "MAX_WALKING_DISTANCE_M",
    "SearchLimits",
    "TransferPoint",
    "build_transfer_points",
    "find_direct_route",
    "find_double_transfer_route",
    "find_single_transfer_route",
    "haversine_distance_m",
    "in_line_distance_m",
    "plan_itineraries",
    "rank_itineraries",
    "walking_itinerary",
]
