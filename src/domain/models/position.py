from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .geo import Coordinate


@dataclass(frozen=True, slots=True)
class Position:
    """A single fix delivered by a location provider."""

    latitude: float
    longitude: float
    accuracy: float = 0.0  # meters
    speed: float = 0.0  # m/s
    heading: float = 0.0  # degrees, [0, 360)
    altitude: float | None = None
    timestamp: datetime | None = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
