from __future__ import annotations

from enum import Enum


class PerformanceStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    DEGRADED = "degraded"
    POOR = "poor"


class GpsQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    VERY_POOR = "very_poor"


class RouteStatus(str, Enum):
    ARRIVED = "arrived"
    VERY_CLOSE = "very_close"
    APPROACHING = "approaching"
    EN_ROUTE = "en_route"
    STATIONARY = "stationary"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ServiceStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"
    ERROR = "error"
