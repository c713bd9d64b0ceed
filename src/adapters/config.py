from __future__ import annotations

import os
from dataclasses import dataclass

PLACEHOLDER_API_KEY = "your_google_maps_api_key_here"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


@dataclass(frozen=True, slots=True)
class AppConfig:
    google_maps_api_key: str | None
    geocode_timeout_s: float = 10.0
    directions_timeout_s: float = 15.0
    fallback_average_speed_kmh: float = 50.0
    retry_max_attempts: int = 3
    retry_initial_delay_s: float = 1.0
    retry_backoff_multiplier: float = 2.0
    publisher_id: str = "python_publisher"
    battery_optimized: bool = False
    position_replay_path: str | None = None
    position_replay_interval_s: float = 0.0
    destination_address: str | None = None
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            google_maps_api_key=_env_str("GOOGLE_MAPS_API_KEY"),
            geocode_timeout_s=_env_float("MAPS_TIMEOUT_S", 10.0),
            directions_timeout_s=_env_float("DIRECTIONS_TIMEOUT_S", 15.0),
            fallback_average_speed_kmh=_env_float("FALLBACK_AVERAGE_SPEED_KMH", 50.0),
            retry_max_attempts=_env_int("RETRY_MAX_ATTEMPTS", 3),
            retry_initial_delay_s=_env_float("RETRY_INITIAL_DELAY_S", 1.0),
            retry_backoff_multiplier=_env_float("RETRY_BACKOFF_MULTIPLIER", 2.0),
            publisher_id=_env_str("PUBLISHER_ID") or "python_publisher",
            battery_optimized=_env_bool("BATTERY_OPTIMIZED", False),
            position_replay_path=_env_str("POSITION_REPLAY_PATH"),
            position_replay_interval_s=_env_float("POSITION_REPLAY_INTERVAL_S", 0.0),
            destination_address=_env_str("DESTINATION_ADDRESS"),
            log_level=(_env_str("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def has_maps_key(self) -> bool:
        key = self.google_maps_api_key
        return bool(key) and key != PLACEHOLDER_API_KEY
