from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class LineRefSchema(BaseModel):
    line_id: str
    name: str
    color: str | None = None


class StopSchema(BaseModel):
    id: str
    name: str
    location: GeoPointSchema


class RouteSegmentSchema(BaseModel):
    mode: Literal["walk", "bus"]
    line: LineRefSchema
    start: GeoPointSchema
    end: GeoPointSchema
    start_stop: StopSchema | None = None
    end_stop: StopSchema | None = None
    walk_to_start_m: float
    walk_from_end_m: float
    in_line_distance_m: float
    total_distance_m: float


class ItinerarySchema(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema
    segments: list[RouteSegmentSchema] = []
    total_walking_m: float
    total_transit_m: float
    total_distance_m: float
    transfer_count: int


class ItineraryRequestSchema(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema
    limit: int | None = Field(default=None, ge=1, le=100)


class ItineraryListSchema(BaseModel):
    itineraries: list[ItinerarySchema] = []
    count: int = 0


class LineSummarySchema(BaseModel):
    line_id: str
    name: str
    color: str | None = None
    stop_count: int
