from .errors import AppError, ErrorInfo, RecoveryAction
from .geo import BoundingBox, Coordinate
from .position import Position
from .route import RouteInfo, RouteResult, RouteStep
from .status import (
    ErrorSeverity,
    GpsQuality,
    PerformanceStatus,
    RouteStatus,
    ServiceStatus,
)
from .tracking import ArrivalNotification, LocationUpdate, RouteUpdate, StatusUpdate

__all__ = [
    "AppError",
    "ArrivalNotification",
    "BoundingBox",
    "Coordinate",
    "ErrorInfo",
    "ErrorSeverity",
    "GpsQuality",
    "LocationUpdate",
    "PerformanceStatus",
    "Position",
    "RecoveryAction",
    "RouteInfo",
    "RouteResult",
    "RouteStatus",
    "RouteStep",
    "RouteUpdate",
    "ServiceStatus",
    "StatusUpdate",
]
