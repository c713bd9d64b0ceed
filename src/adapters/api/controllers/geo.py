from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_config
from src.adapters.api.schemas.geo import (
    BoundingBoxSchema,
    CoordinateSchema,
    DistanceRequestSchema,
    DistanceResponseSchema,
    GpsQualitySchema,
    PolicySchema,
    PolylineRequestSchema,
    PolylineResponseSchema,
)
from src.adapters.config import AppConfig
from src.domain.algorithms import policy
from src.domain.algorithms.geo_utils import (
    bearing_deg,
    bounding_box,
    decode_polyline,
    haversine_distance_m,
    polyline_distance_m,
)
from src.domain.algorithms.gps_quality import classify_gps_quality
from src.domain.models import Coordinate, PerformanceStatus

router = APIRouter(tags=["geo"])


def _to_domain(c: CoordinateSchema) -> Coordinate:
    return Coordinate(latitude=c.latitude, longitude=c.longitude)


def _to_schema(c: Coordinate) -> CoordinateSchema:
    return CoordinateSchema(latitude=c.latitude, longitude=c.longitude)


@router.post("/geo/distance", response_model=DistanceResponseSchema)
def distance(req: DistanceRequestSchema) -> DistanceResponseSchema:
    a = _to_domain(req.start)
    b = _to_domain(req.end)
    return DistanceResponseSchema(
        distance_m=haversine_distance_m(a, b), bearing_deg=bearing_deg(a, b)
    )


@router.post("/geo/polyline/decode", response_model=PolylineResponseSchema)
def decode(req: PolylineRequestSchema) -> PolylineResponseSchema:
    # DecodeError is mapped to 422 by the app-level handler.
    points = decode_polyline(req.encoded)
    box = bounding_box(points)
    return PolylineResponseSchema(
        points=[_to_schema(p) for p in points],
        bounds=BoundingBoxSchema(
            southwest=_to_schema(box.southwest), northeast=_to_schema(box.northeast)
        ),
        distance_m=polyline_distance_m(points),
    )


@router.get("/gps-quality", response_model=GpsQualitySchema)
def gps_quality(accuracy: float = Query(..., ge=0.0)) -> GpsQualitySchema:
    return GpsQualitySchema(
        accuracy_m=accuracy, quality=classify_gps_quality(accuracy).value
    )


@router.get("/policy/{performance}", response_model=PolicySchema)
def tuning_policy(
    performance: str,
    battery_optimized: bool | None = None,
    is_moving: bool = False,
    cfg: AppConfig = Depends(get_config),
) -> PolicySchema:
    if battery_optimized is None:
        battery_optimized = cfg.battery_optimized

    try:
        status = PerformanceStatus(performance)
    except ValueError as exc:
        raise HTTPException(
            status_code=404, detail=f"Unknown performance status: {performance}"
        ) from exc

    return PolicySchema(
        performance=status.value,
        battery_optimized=battery_optimized,
        is_moving=is_moving,
        location_interval_ms=policy.optimal_location_interval_ms(
            status, battery_optimized=battery_optimized, is_moving=is_moving
        ),
        map_update_fps=policy.optimal_map_update_frequency(status),
        use_animations=policy.should_use_animations(status),
        trail_length=policy.optimal_trail_length(status),
        recommendations=list(policy.performance_recommendations(status)),
    )
