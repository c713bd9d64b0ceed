from __future__ import annotations

from dataclasses import dataclass, field

from .geo import BoundingBox, Coordinate


@dataclass(frozen=True, slots=True)
class RouteStep:
    instruction: str
    distance_m: int
    duration_s: int
    distance_text: str
    duration_text: str
    start: Coordinate
    end: Coordinate


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Route as returned by a directions provider."""

    polyline: tuple[Coordinate, ...]
    distance_m: int
    duration_s: int
    distance_text: str
    duration_text: str
    bounds: BoundingBox
    steps: tuple[RouteStep, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class RouteInfo:
    distance_m: int
    duration_s: int
    distance_text: str
    duration_text: str
    # True when derived from a straight line instead of a real route.
    is_estimate: bool = False

    def to_record(self) -> dict[str, object]:
        return {
            "distance": self.distance_text,
            "duration": self.duration_text,
            "distanceValue": self.distance_m,
            "durationValue": self.duration_s,
            "isEstimate": self.is_estimate,
        }
