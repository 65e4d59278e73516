from __future__ import annotations

from fastapi import APIRouter, Depends

from busplanner.adapters.api.dependencies import get_itinerary_service
from busplanner.adapters.api.schemas.itineraries import (
    GeoPointSchema,
    ItineraryListSchema,
    ItineraryRequestSchema,
    ItinerarySchema,
    LineRefSchema,
    LineSummarySchema,
    RouteSegmentSchema,
    StopSchema,
)
from busplanner.app.services.itinerary_service import ItineraryService
from busplanner.domain.models import GeoPoint, Itinerary, Stop

router = APIRouter(tags=["itineraries"])


def _point(p: GeoPoint) -> GeoPointSchema:
    return GeoPointSchema(lat=p.lat, lon=p.lon)


def _stop(stop: Stop | None) -> StopSchema | None:
    if stop is None:
        return None
    return StopSchema(id=stop.id, name=stop.name, location=_point(stop.location))


def _itinerary_to_schema(itinerary: Itinerary) -> ItinerarySchema:
    return ItinerarySchema(
        origin=_point(itinerary.origin),
        destination=_point(itinerary.destination),
        segments=[
            RouteSegmentSchema(
                mode=seg.mode.value,
                line=LineRefSchema(
                    line_id=seg.line.line_id,
                    name=seg.line.display_name,
                    color=seg.line.color,
                ),
                start=_point(seg.start),
                end=_point(seg.end),
                start_stop=_stop(seg.start_stop),
                end_stop=_stop(seg.end_stop),
                walk_to_start_m=seg.walk_to_start_m,
                walk_from_end_m=seg.walk_from_end_m,
                in_line_distance_m=seg.in_line_distance_m,
                total_distance_m=seg.total_distance_m,
            )
            for seg in itinerary.segments
        ],
        total_walking_m=itinerary.total_walking_m,
        total_transit_m=itinerary.total_transit_m,
        total_distance_m=itinerary.total_distance_m,
        transfer_count=itinerary.transfer_count,
    )


@router.post("/itineraries", response_model=ItineraryListSchema)
def plan_itineraries(
    req: ItineraryRequestSchema,
    service: ItineraryService = Depends(get_itinerary_service),
) -> ItineraryListSchema:
    origin = GeoPoint(lat=req.origin.lat, lon=req.origin.lon)
    destination = GeoPoint(lat=req.destination.lat, lon=req.destination.lon)
    itineraries = service.plan(
        origin=origin, destination=destination, max_results=req.limit
    )
    # No itinerary is a normal outcome, not an error.
    return ItineraryListSchema(
        itineraries=[_itinerary_to_schema(it) for it in itineraries],
        count=len(itineraries),
    )


@router.get("/lines", response_model=list[LineSummarySchema])
def list_lines(
    service: ItineraryService = Depends(get_itinerary_service),
) -> list[LineSummarySchema]:
    return [
        LineSummarySchema(
            line_id=line.line_id,
            name=line.display_name,
            color=line.color,
            stop_count=len(line.stops),
        )
        for line in service.list_lines()
    ]
