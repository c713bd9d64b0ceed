from __future__ import annotations

from src.domain.models import Coordinate, RouteInfo, RouteResult, RouteStatus

from .geo_utils import haversine_distance_m

ARRIVED_RADIUS_M = 50.0
VERY_CLOSE_RADIUS_M = 100.0
APPROACHING_RADIUS_M = 500.0
MOVING_SPEED_MPS = 0.5
DEFAULT_AVERAGE_SPEED_KMH = 50.0

# Strict upper bounds, first match wins.
_STATUS_BY_DISTANCE: tuple[tuple[float, RouteStatus], ...] = (
    (ARRIVED_RADIUS_M, RouteStatus.ARRIVED),
    (VERY_CLOSE_RADIUS_M, RouteStatus.VERY_CLOSE),
    (APPROACHING_RADIUS_M, RouteStatus.APPROACHING),
)


def is_moving(speed_mps: float) -> bool:
    return speed_mps > MOVING_SPEED_MPS


def derive_route_status(distance_m: float, is_moving: bool) -> RouteStatus:
    for upper, status in _STATUS_BY_DISTANCE:
        if distance_m < upper:
            return status
    return RouteStatus.EN_ROUTE if is_moving else RouteStatus.STATIONARY


def estimate_time_to_destination_s(distance_m: float, speed_mps: float) -> int | None:
    if speed_mps <= 0.0:
        return None
    return round(distance_m / speed_mps)


def format_distance(distance_m: float) -> str:
    return f"{distance_m / 1000:.1f} km"


def format_duration(duration_s: float) -> str:
    return f"{round(duration_s / 60)} min"


def route_or_fallback(
    route: RouteResult | None,
    start: Coordinate,
    end: Coordinate,
    *,
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH,
) -> RouteInfo:
    """Project a provider route, or estimate one along the straight line."""

    if route is not None:
        return RouteInfo(
            distance_m=route.distance_m,
            duration_s=route.duration_s,
            distance_text=route.distance_text,
            duration_text=route.duration_text,
        )

    if average_speed_kmh <= 0.0:
        raise ValueError(f"Invalid average speed: {average_speed_kmh}")

    distance = haversine_distance_m(start, end)
    duration_s = round(distance / (average_speed_kmh / 3.6))
    return RouteInfo(
        distance_m=round(distance),
        duration_s=duration_s,
        distance_text=format_distance(distance),
        duration_text=format_duration(duration_s),
        is_estimate=True,
    )
