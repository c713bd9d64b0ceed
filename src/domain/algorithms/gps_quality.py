from __future__ import annotations

import math

from src.domain.models import GpsQuality

# Inclusive upper bounds, checked in order.
_THRESHOLDS_M: tuple[tuple[float, GpsQuality], ...] = (
    (5.0, GpsQuality.EXCELLENT),
    (10.0, GpsQuality.GOOD),
    (20.0, GpsQuality.FAIR),
    (50.0, GpsQuality.POOR),
)


def classify_gps_quality(accuracy_m: float) -> GpsQuality:
    if math.isnan(accuracy_m) or accuracy_m < 0.0:
        raise ValueError(f"Invalid GPS accuracy: {accuracy_m}")

    for upper, quality in _THRESHOLDS_M:
        if accuracy_m <= upper:
            return quality
    return GpsQuality.VERY_POOR
