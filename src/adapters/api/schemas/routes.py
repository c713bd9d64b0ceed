from __future__ import annotations

from pydantic import BaseModel, Field

from .geo import CoordinateSchema


class RouteInfoRequestSchema(BaseModel):
    origin: CoordinateSchema
    destination: CoordinateSchema


class RouteInfoSchema(BaseModel):
    distance_m: int
    duration_s: int
    distance_text: str
    duration_text: str
    is_estimate: bool = False


class RouteStatusRequestSchema(BaseModel):
    distance_m: float = Field(..., ge=0.0)
    is_moving: bool = False


class RouteStatusSchema(BaseModel):
    distance_m: float
    is_moving: bool
    route_status: str
