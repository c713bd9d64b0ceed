from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from src.adapters.config import AppConfig
from src.adapters.maps.google_maps_adapter import GoogleMapsAdapter
from src.adapters.reporting.logging_error_reporter import LoggingErrorReporter
from src.app.ports.output import IDirectionsProvider
from src.app.services.retry_executor import RetryExecutor
from src.app.services.route_info_service import RouteInfoService
from src.domain.exceptions import ConfigurationError


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig.from_env()


def _maps_adapter(cfg: AppConfig) -> GoogleMapsAdapter | None:
    if not cfg.has_maps_key:
        return None
    return GoogleMapsAdapter(
        api_key=cfg.google_maps_api_key,
        geocode_timeout_s=cfg.geocode_timeout_s,
        directions_timeout_s=cfg.directions_timeout_s,
    )


def get_directions_provider(cfg: AppConfig = Depends(get_config)) -> IDirectionsProvider:
    provider = _maps_adapter(cfg)
    if provider is None:
        raise ConfigurationError("Google Maps API key not configured")
    return provider


def get_route_info_service() -> RouteInfoService:
    cfg = get_config()

    return RouteInfoService(
        directions_provider=_maps_adapter(cfg),
        retry_executor=RetryExecutor(error_reporter=LoggingErrorReporter()),
        average_speed_kmh=cfg.fallback_average_speed_kmh,
        max_attempts=cfg.retry_max_attempts,
        initial_delay_s=cfg.retry_initial_delay_s,
        backoff_multiplier=cfg.retry_backoff_multiplier,
    )
