from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Coordinate, RouteResult


class IDirectionsProvider(ABC):
    """Port for geocoding and turn-by-turn routes.

    Implementations raise `ProviderUnavailable` when no usable data comes back.
    """

    @abstractmethod
    async def geocode(self, address: str) -> Coordinate | None:
        """Resolve an address, or return None when nothing matches."""

    @abstractmethod
    async def reverse_geocode(self, coordinate: Coordinate) -> str | None:
        """Return a formatted address for a coordinate."""

    @abstractmethod
    async def calculate_route(
        self,
        start: Coordinate,
        end: Coordinate,
        *,
        travel_mode: str = "driving",
        avoid_tolls: bool = False,
        avoid_highways: bool = False,
    ) -> RouteResult:
        """Compute a route between two points."""
