from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_directions_provider, get_route_info_service
from src.adapters.api.schemas.geo import CoordinateSchema
from src.adapters.api.schemas.routes import (
    RouteInfoRequestSchema,
    RouteInfoSchema,
    RouteStatusRequestSchema,
    RouteStatusSchema,
)
from src.app.ports.output import IDirectionsProvider
from src.app.services.route_info_service import RouteInfoService
from src.domain.algorithms.route_status import derive_route_status
from src.domain.models import Coordinate

router = APIRouter(tags=["routes"])


@router.post("/routes/info", response_model=RouteInfoSchema)
async def route_info(
    req: RouteInfoRequestSchema,
    service: RouteInfoService = Depends(get_route_info_service),
) -> RouteInfoSchema:
    info = await service.get_route_info(
        Coordinate(latitude=req.origin.latitude, longitude=req.origin.longitude),
        Coordinate(
            latitude=req.destination.latitude, longitude=req.destination.longitude
        ),
    )
    return RouteInfoSchema(
        distance_m=info.distance_m,
        duration_s=info.duration_s,
        distance_text=info.distance_text,
        duration_text=info.duration_text,
        is_estimate=info.is_estimate,
    )


@router.post("/routes/status", response_model=RouteStatusSchema)
def route_status(req: RouteStatusRequestSchema) -> RouteStatusSchema:
    status = derive_route_status(req.distance_m, req.is_moving)
    return RouteStatusSchema(
        distance_m=req.distance_m, is_moving=req.is_moving, route_status=status.value
    )


@router.get("/geocode", response_model=CoordinateSchema)
async def geocode(
    address: str = Query(..., min_length=1),
    provider: IDirectionsProvider = Depends(get_directions_provider),
) -> CoordinateSchema:
    coords = await provider.geocode(address.strip())
    if coords is None:
        raise HTTPException(status_code=404, detail=f"Address not found: {address}")
    return CoordinateSchema(latitude=coords.latitude, longitude=coords.longitude)
