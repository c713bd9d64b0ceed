from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.ports.output import IDirectionsProvider
from src.domain.algorithms.route_status import (
    DEFAULT_AVERAGE_SPEED_KMH,
    route_or_fallback,
)
from src.domain.exceptions import ConfigurationError, ProviderUnavailable, RetryError
from src.domain.models import Coordinate, RouteInfo, RouteResult

from .retry_executor import RetryExecutor

logger = logging.getLogger(__name__)


def _is_retryable(exc: Exception) -> bool:
    return not isinstance(exc, ConfigurationError)


@dataclass(slots=True)
class RouteInfoService:
    """Route lookup that always yields a usable `RouteInfo`.

    - Asks the directions provider (through the retry executor, if given).
    - Falls back to a straight-line estimate when the provider is unavailable.
    """

    directions_provider: IDirectionsProvider | None = None
    retry_executor: RetryExecutor | None = None

    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH
    max_attempts: int = 3
    initial_delay_s: float = 1.0
    backoff_multiplier: float = 2.0

    async def fetch_route(self, start: Coordinate, end: Coordinate) -> RouteResult | None:
        provider = self.directions_provider
        if provider is None:
            return None

        async def _attempt() -> RouteResult:
            return await provider.calculate_route(start, end)

        try:
            if self.retry_executor is None:
                return await _attempt()
            return await self.retry_executor.execute(
                _attempt,
                max_attempts=self.max_attempts,
                initial_delay_s=self.initial_delay_s,
                backoff_multiplier=self.backoff_multiplier,
                should_retry=_is_retryable,
                context="maps: calculate route",
            )
        except (ProviderUnavailable, ConfigurationError, RetryError) as exc:
            logger.info("Directions unavailable, using straight-line estimate: %s", exc)
            return None

    async def get_route_info(self, start: Coordinate, end: Coordinate) -> RouteInfo:
        route = await self.fetch_route(start, end)
        return route_or_fallback(
            route, start, end, average_speed_kmh=self.average_speed_kmh
        )
