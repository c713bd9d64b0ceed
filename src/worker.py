from __future__ import annotations

import asyncio
import logging

from src.adapters.config import AppConfig
from src.adapters.location.replay_position_provider import ReplayPositionProvider
from src.adapters.maps.google_maps_adapter import GoogleMapsAdapter
from src.adapters.messaging.logging_publisher import LoggingMessagePublisher
from src.adapters.reporting.logging_error_reporter import LoggingErrorReporter
from src.app.services.error_handler_service import ErrorHandlerService
from src.app.services.retry_executor import RetryExecutor
from src.app.services.route_info_service import RouteInfoService
from src.app.services.tracking_service import TrackingService
from src.domain.exceptions import ProviderUnavailable

logger = logging.getLogger("asset_tracker.worker")


def build_service(cfg: AppConfig) -> TrackingService:
    reporter = LoggingErrorReporter()
    retry = RetryExecutor(error_reporter=reporter)

    maps = None
    if cfg.has_maps_key:
        maps = GoogleMapsAdapter(
            api_key=cfg.google_maps_api_key,
            geocode_timeout_s=cfg.geocode_timeout_s,
            directions_timeout_s=cfg.directions_timeout_s,
        )
    else:
        logger.warning("GOOGLE_MAPS_API_KEY not configured; using straight-line routes")

    handler = ErrorHandlerService(retry_executor=retry, error_reporter=reporter)

    routes = RouteInfoService(
        directions_provider=maps,
        retry_executor=retry,
        average_speed_kmh=cfg.fallback_average_speed_kmh,
        max_attempts=cfg.retry_max_attempts,
        initial_delay_s=cfg.retry_initial_delay_s,
        backoff_multiplier=cfg.retry_backoff_multiplier,
    )

    return TrackingService(
        publisher=LoggingMessagePublisher(),
        route_info_service=routes,
        directions_provider=maps,
        error_reporter=reporter,
        error_handler=handler,
        publisher_id=cfg.publisher_id,
    )


async def run(cfg: AppConfig) -> int:
    service = build_service(cfg)

    if cfg.destination_address:
        try:
            coords = await service.set_destination_address(cfg.destination_address)
        except ProviderUnavailable as exc:
            coords = None
            logger.warning("Error finding destination: %s", exc)
        if coords is None:
            logger.warning("Destination not found: %s", cfg.destination_address)

    provider = ReplayPositionProvider(
        path=cfg.position_replay_path, interval_s=cfg.position_replay_interval_s
    )
    task = service.subscribe(provider.positions())
    try:
        count = await task
    finally:
        task.cancel()

    await service.send_status("stopped")
    logger.info("Published %d location updates", count)
    return count


def main() -> None:
    cfg = AppConfig.from_env()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run(cfg))


if __name__ == "__main__":
    main()
