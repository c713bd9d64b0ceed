from __future__ import annotations

from pydantic import BaseModel, Field


class CoordinateSchema(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class BoundingBoxSchema(BaseModel):
    southwest: CoordinateSchema
    northeast: CoordinateSchema


class DistanceRequestSchema(BaseModel):
    start: CoordinateSchema
    end: CoordinateSchema


class DistanceResponseSchema(BaseModel):
    distance_m: float
    bearing_deg: float


class PolylineRequestSchema(BaseModel):
    encoded: str


class PolylineResponseSchema(BaseModel):
    points: list[CoordinateSchema] = []
    bounds: BoundingBoxSchema
    distance_m: float


class GpsQualitySchema(BaseModel):
    accuracy_m: float
    quality: str


class PolicySchema(BaseModel):
    performance: str
    battery_optimized: bool
    is_moving: bool
    location_interval_ms: int
    map_update_fps: int
    use_animations: bool
    trail_length: int
    recommendations: list[str] = []
