from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Mapping

from src.app.ports.output import IDirectionsProvider, IErrorReporter, IMessagePublisher
from src.domain.algorithms.geo_utils import haversine_distance_m
from src.domain.algorithms.gps_quality import classify_gps_quality
from src.domain.algorithms.route_status import (
    ARRIVED_RADIUS_M,
    derive_route_status,
    estimate_time_to_destination_s,
    is_moving,
    route_or_fallback,
)
from src.domain.models import (
    ArrivalNotification,
    Coordinate,
    ErrorSeverity,
    LocationUpdate,
    Position,
    RouteUpdate,
    StatusUpdate,
)

from .error_handler_service import ErrorHandlerService
from .route_info_service import RouteInfoService

logger = logging.getLogger(__name__)

DEFAULT_PUBLISHER_ID = "python_publisher"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def new_session_id(now: datetime) -> str:
    return f"session_{_epoch_ms(now)}_{now.microsecond}"


@dataclass(slots=True)
class TrackingSession:
    """State of one destination-tracking session.

    The arrival flag has a single writer: the position stream that feeds
    `check_arrival`. It resets whenever the destination changes.
    """

    session_id: str
    started_at: datetime | None = None
    destination: str | None = None
    destination_coords: Coordinate | None = None
    _arrived: bool = field(default=False, init=False, repr=False)

    @classmethod
    def create(cls, *, now: datetime | None = None) -> "TrackingSession":
        return cls(session_id=new_session_id(now or _utcnow()))

    @property
    def has_arrived(self) -> bool:
        return self._arrived

    def set_destination(self, coords: Coordinate, label: str | None = None) -> None:
        self.destination_coords = coords
        self.destination = label
        self._arrived = False

    def clear_destination(self) -> None:
        self.destination_coords = None
        self.destination = None
        self._arrived = False

    def elapsed_ms(self, now: datetime) -> int:
        if self.started_at is None:
            return 0
        return max(0, _epoch_ms(now) - _epoch_ms(self.started_at))

    def check_arrival(
        self, position: Position, *, now: datetime, publisher_id: str
    ) -> ArrivalNotification | None:
        """Return an arrival notification the first time the destination is reached."""

        if self.destination_coords is None or self._arrived:
            return None

        distance = haversine_distance_m(position.coordinate, self.destination_coords)
        if distance >= ARRIVED_RADIUS_M:
            return None

        self._arrived = True
        return ArrivalNotification(
            timestamp_ms=_epoch_ms(now),
            publisher_id=publisher_id,
            session_id=self.session_id,
            destination=self.destination,
            destination_coords=self.destination_coords,
            arrival_location=position.coordinate,
            final_distance_m=distance,
            accuracy=position.accuracy,
            arrival_time=now.isoformat(),
            journey_duration_ms=(
                self.elapsed_ms(now) if self.started_at is not None else None
            ),
        )


@dataclass(slots=True)
class TrackingService:
    """Turns a stream of positions into outbound tracking messages.

    Message names: location-update, route-update, arrival-notification,
    status-update.
    """

    publisher: IMessagePublisher
    session: TrackingSession = field(default_factory=TrackingSession.create)
    route_info_service: RouteInfoService | None = None
    directions_provider: IDirectionsProvider | None = None
    error_reporter: IErrorReporter | None = None
    error_handler: ErrorHandlerService | None = None
    publisher_id: str = DEFAULT_PUBLISHER_ID
    clock: Callable[[], datetime] = _utcnow

    last_position: Position | None = field(default=None, init=False)

    async def set_destination_address(self, address: str) -> Coordinate | None:
        address = address.strip()
        if not address or self.directions_provider is None:
            return None

        coords = await self.directions_provider.geocode(address)
        if coords is not None:
            self.session.set_destination(coords, label=address)
            logger.info("Destination set: %s -> %s", address, coords)
        else:
            logger.info("Destination not found: %s", address)
        return coords

    def clear_destination(self) -> None:
        self.session.clear_destination()

    def _report(
        self, error: BaseException, *, severity: ErrorSeverity, context: str
    ) -> None:
        if self.error_handler is not None:
            self.error_handler.handle_error(error, severity=severity, context=context)
        elif self.error_reporter is not None:
            self.error_reporter.report(error, severity=severity, context=context)

    async def _publish(self, name: str, data: Mapping[str, Any]) -> bool:
        try:
            await self.publisher.publish(name, data)
            return True
        except Exception as exc:
            logger.warning("Failed to publish %s: %s", name, exc)
            self._report(
                exc, severity=ErrorSeverity.MEDIUM, context=f"publish {name}"
            )
            return False

    async def handle_position(self, position: Position) -> LocationUpdate:
        # Validate the fix before touching session state.
        here = position.coordinate
        quality = classify_gps_quality(position.accuracy)

        now = self.clock()
        self.last_position = position
        moving = is_moving(position.speed)
        dest = self.session.destination_coords

        arrival = self.session.check_arrival(
            position, now=now, publisher_id=self.publisher_id
        )
        if arrival is not None:
            logger.info("Arrived at destination: %s", self.session.destination)
            await self._publish("arrival-notification", arrival.to_record())

        distance = None
        eta_s = None
        status = None
        route = None
        route_info = None
        if dest is not None:
            distance = haversine_distance_m(here, dest)
            eta_s = estimate_time_to_destination_s(distance, position.speed)
            status = derive_route_status(distance, moving)

            if self.route_info_service is not None:
                route = await self.route_info_service.fetch_route(here, dest)
                route_info = route_or_fallback(
                    route,
                    here,
                    dest,
                    average_speed_kmh=self.route_info_service.average_speed_kmh,
                )

        update = LocationUpdate(
            position=position,
            timestamp_ms=_epoch_ms(now),
            session_id=self.session.session_id,
            publisher_id=self.publisher_id,
            gps_quality=quality,
            is_moving=moving,
            destination=self.session.destination,
            destination_coords=dest,
            distance_to_destination_m=distance,
            estimated_time_to_destination_s=eta_s,
            route_status=status,
            route_info=route_info,
            publishing_duration_ms=self.session.elapsed_ms(now),
        )
        await self._publish("location-update", update.to_record())

        if route is not None and route_info is not None:
            route_update = RouteUpdate(
                timestamp_ms=_epoch_ms(now),
                publisher_id=self.publisher_id,
                destination=self.session.destination,
                destination_coords=dest,
                route_info=route_info,
                current_location=here,
                polyline_points=len(route.polyline),
            )
            await self._publish("route-update", route_update.to_record())

        return update

    async def track(self, positions: AsyncIterator[Position]) -> int:
        """Consume positions until the stream ends; return how many were handled."""

        if self.session.started_at is None:
            self.session.started_at = self.clock()

        count = 0
        async for position in positions:
            try:
                await self.handle_position(position)
            except ValueError as exc:
                # Bad fix from the provider (e.g. negative accuracy); skip it.
                logger.warning("Skipping invalid position %s: %s", position, exc)
                self._report(exc, severity=ErrorSeverity.LOW, context="location stream")
                continue
            count += 1
        return count

    def subscribe(self, positions: AsyncIterator[Position]) -> asyncio.Task[int]:
        """Start tracking in the background; cancel the task to unsubscribe."""

        return asyncio.create_task(self.track(positions))

    async def send_status(self, status: str) -> StatusUpdate:
        current = self.last_position.coordinate if self.last_position else None
        update = StatusUpdate(
            status=status,
            timestamp_ms=_epoch_ms(self.clock()),
            publisher_id=self.publisher_id,
            destination=self.session.destination,
            current_location=current,
        )
        await self._publish("status-update", update.to_record())
        return update
