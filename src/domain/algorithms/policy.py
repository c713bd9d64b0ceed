"""Tuning tables keyed by performance status.

Every table covers the whole `PerformanceStatus` enum; a missing member is a
bug and is caught by the unit tests.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from src.domain.models import PerformanceStatus

DEFAULT_LOCATION_INTERVAL_MS = 5000
BATTERY_OPTIMIZED_INTERVAL_MS = 15000
HIGH_PERFORMANCE_INTERVAL_MS = 2000

TARGET_FRAME_RATE = 60.0
MIN_ACCEPTABLE_FRAME_RATE = 30.0
MAX_OPERATION_TIME_MS = 1000.0
SLOW_OPERATION_SHARE = 0.3

# (moving, stationary)
_LOCATION_INTERVALS_MS: Mapping[PerformanceStatus, tuple[int, int]] = {
    PerformanceStatus.EXCELLENT: (
        HIGH_PERFORMANCE_INTERVAL_MS,
        DEFAULT_LOCATION_INTERVAL_MS,
    ),
    PerformanceStatus.GOOD: (
        DEFAULT_LOCATION_INTERVAL_MS,
        DEFAULT_LOCATION_INTERVAL_MS,
    ),
    PerformanceStatus.DEGRADED: (
        DEFAULT_LOCATION_INTERVAL_MS,
        DEFAULT_LOCATION_INTERVAL_MS * 2,
    ),
    PerformanceStatus.POOR: (
        BATTERY_OPTIMIZED_INTERVAL_MS,
        BATTERY_OPTIMIZED_INTERVAL_MS,
    ),
}

_MAP_UPDATE_FPS: Mapping[PerformanceStatus, int] = {
    PerformanceStatus.EXCELLENT: 60,
    PerformanceStatus.GOOD: 30,
    PerformanceStatus.DEGRADED: 15,
    PerformanceStatus.POOR: 10,
}

_ANIMATIONS: Mapping[PerformanceStatus, bool] = {
    PerformanceStatus.EXCELLENT: True,
    PerformanceStatus.GOOD: True,
    PerformanceStatus.DEGRADED: False,
    PerformanceStatus.POOR: False,
}

_TRAIL_LENGTH: Mapping[PerformanceStatus, int] = {
    PerformanceStatus.EXCELLENT: 100,
    PerformanceStatus.GOOD: 50,
    PerformanceStatus.DEGRADED: 25,
    PerformanceStatus.POOR: 10,
}

_RECOMMENDATIONS: Mapping[PerformanceStatus, tuple[str, ...]] = {
    PerformanceStatus.EXCELLENT: ("Performance is excellent",),
    PerformanceStatus.GOOD: ("Performance is acceptable",),
    PerformanceStatus.DEGRADED: (
        "Optimize location update intervals",
        "Reduce marker complexity",
        "Consider battery optimization mode",
    ),
    PerformanceStatus.POOR: (
        "Reduce map update frequency",
        "Disable non-essential animations",
        "Clear location trail more frequently",
        "Consider using lower map quality",
    ),
}

TABLES: Mapping[str, Mapping[PerformanceStatus, object]] = {
    "location_intervals_ms": _LOCATION_INTERVALS_MS,
    "map_update_fps": _MAP_UPDATE_FPS,
    "animations": _ANIMATIONS,
    "trail_length": _TRAIL_LENGTH,
    "recommendations": _RECOMMENDATIONS,
}


def optimal_location_interval_ms(
    performance: PerformanceStatus, *, battery_optimized: bool, is_moving: bool
) -> int:
    if battery_optimized:
        if is_moving:
            return BATTERY_OPTIMIZED_INTERVAL_MS
        return BATTERY_OPTIMIZED_INTERVAL_MS * 2

    moving_ms, stationary_ms = _LOCATION_INTERVALS_MS[performance]
    return moving_ms if is_moving else stationary_ms


def optimal_map_update_frequency(performance: PerformanceStatus) -> int:
    return _MAP_UPDATE_FPS[performance]


def should_use_animations(performance: PerformanceStatus) -> bool:
    return _ANIMATIONS[performance]


def optimal_trail_length(performance: PerformanceStatus) -> int:
    return _TRAIL_LENGTH[performance]


def performance_recommendations(performance: PerformanceStatus) -> tuple[str, ...]:
    return _RECOMMENDATIONS[performance]


def classify_performance(
    frame_rate: float, recent_operation_times_ms: Sequence[float] = ()
) -> PerformanceStatus:
    """Derive a status from the current frame rate and recent operation timings."""

    if frame_rate < MIN_ACCEPTABLE_FRAME_RATE:
        return PerformanceStatus.POOR

    slow = sum(1 for t in recent_operation_times_ms if t > MAX_OPERATION_TIME_MS)
    if slow > len(recent_operation_times_ms) * SLOW_OPERATION_SHARE:
        return PerformanceStatus.DEGRADED

    if frame_rate >= TARGET_FRAME_RATE and slow == 0:
        return PerformanceStatus.EXCELLENT

    return PerformanceStatus.GOOD
