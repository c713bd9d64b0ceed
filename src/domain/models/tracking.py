from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .geo import Coordinate
from .position import Position
from .route import RouteInfo
from .status import GpsQuality, RouteStatus


def _coords(c: Coordinate | None) -> dict[str, float] | None:
    return c.to_record() if c is not None else None


@dataclass(frozen=True, slots=True)
class LocationUpdate:
    """Payload of a 'location-update' message."""

    position: Position
    timestamp_ms: int
    session_id: str
    publisher_id: str
    gps_quality: GpsQuality
    is_moving: bool
    destination: str | None = None
    destination_coords: Coordinate | None = None
    distance_to_destination_m: float | None = None
    estimated_time_to_destination_s: int | None = None
    route_status: RouteStatus | None = None
    route_info: RouteInfo | None = None
    publishing_duration_ms: int = 0

    def to_record(self) -> dict[str, Any]:
        p = self.position
        distance = self.distance_to_destination_m
        return {
            "latitude": p.latitude,
            "longitude": p.longitude,
            "timestamp": self.timestamp_ms,
            "accuracy": p.accuracy,
            "altitude": p.altitude,
            "speed": p.speed,
            "speedKmh": p.speed * 3.6,
            "heading": p.heading,
            "isMoving": self.is_moving,
            "movementStatus": "moving" if self.is_moving else "stationary",
            "destination": self.destination or None,
            "destinationCoords": _coords(self.destination_coords),
            "distanceToDestination": distance,
            "distanceToDestinationKm": distance / 1000 if distance is not None else None,
            "estimatedTimeToDestination": self.estimated_time_to_destination_s,
            "routeStatus": self.route_status.value if self.route_status else None,
            "routeInfo": self.route_info.to_record() if self.route_info else None,
            "publisherId": self.publisher_id,
            "sessionId": self.session_id,
            "gpsQuality": self.gps_quality.value,
            "batteryOptimized": not self.is_moving,
            "publishingDuration": self.publishing_duration_ms,
        }


@dataclass(frozen=True, slots=True)
class RouteUpdate:
    timestamp_ms: int
    publisher_id: str
    destination: str | None
    destination_coords: Coordinate | None
    route_info: RouteInfo
    current_location: Coordinate
    polyline_points: int = 0

    def to_record(self) -> dict[str, Any]:
        info = dict(self.route_info.to_record())
        info["polylinePoints"] = self.polyline_points
        info["hasRoute"] = not self.route_info.is_estimate
        return {
            "timestamp": self.timestamp_ms,
            "publisherId": self.publisher_id,
            "destination": self.destination,
            "destinationCoords": _coords(self.destination_coords),
            "routeInfo": info,
            "currentLocation": self.current_location.to_record(),
        }


@dataclass(frozen=True, slots=True)
class ArrivalNotification:
    timestamp_ms: int
    publisher_id: str
    session_id: str
    destination: str | None
    destination_coords: Coordinate
    arrival_location: Coordinate
    final_distance_m: float
    accuracy: float
    arrival_time: str  # ISO 8601
    journey_duration_ms: int | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp_ms,
            "publisherId": self.publisher_id,
            "sessionId": self.session_id,
            "destination": self.destination,
            "destinationCoords": self.destination_coords.to_record(),
            "arrivalLocation": self.arrival_location.to_record(),
            "finalDistance": self.final_distance_m,
            "accuracy": self.accuracy,
            "arrivalTime": self.arrival_time,
            "journeyDuration": self.journey_duration_ms,
        }


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    status: str
    timestamp_ms: int
    publisher_id: str
    destination: str | None = None
    current_location: Coordinate | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp_ms,
            "publisherId": self.publisher_id,
            "destination": self.destination or None,
            "currentLocation": _coords(self.current_location),
            "message": f"Status updated to: {self.status}",
        }
