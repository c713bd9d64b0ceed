from __future__ import annotations

import asyncio
import json
import logging

import pytest

from src.adapters.config import AppConfig
from src.adapters.location.replay_position_provider import ReplayPositionProvider
from src.adapters.messaging.logging_publisher import LoggingMessagePublisher
from src.adapters.reporting.logging_error_reporter import LoggingErrorReporter
from src.app.services.tracking_service import TrackingService
from src.domain.exceptions import ProviderUnavailable
from src.domain.models import ErrorSeverity

from .fakes import FakePublisher


def _collect(provider: ReplayPositionProvider) -> list:
    async def _run():
        return [p async for p in provider.positions()]

    return asyncio.run(_run())


def test_replay_provider_reads_json_lines(tmp_path) -> None:
    path = tmp_path / "track.jsonl"
    rows = [
        {"latitude": 28.1, "longitude": -15.4, "accuracy": 4, "speed": 1.2},
        {"latitude": 28.2, "longitude": -15.5, "heading": 370, "altitude": 12},
    ]
    path.write_text(
        "# recorded track\n" + "\n".join(json.dumps(r) for r in rows) + "\n\n",
        encoding="utf-8",
    )

    positions = _collect(ReplayPositionProvider(path=path, interval_s=0.0))

    assert len(positions) == 2
    assert positions[0].accuracy == 4.0
    assert positions[0].speed == 1.2
    assert positions[1].heading == pytest.approx(10.0)
    assert positions[1].altitude == 12.0


def test_replay_provider_skips_malformed_lines(tmp_path, caplog) -> None:
    path = tmp_path / "track.jsonl"
    path.write_text(
        "\n".join(
            [
                json.dumps({"latitude": 28.1, "longitude": -15.4}),
                "{not json",
                json.dumps({"longitude": -15.4}),
                json.dumps({"latitude": 28.2, "longitude": -15.5}),
            ]
        ),
        encoding="utf-8",
    )
    caplog.set_level(logging.WARNING)

    positions = _collect(ReplayPositionProvider(path=path, interval_s=0.0))

    assert [p.latitude for p in positions] == [28.1, 28.2]
    skipped = [r.getMessage() for r in caplog.records if "malformed" in r.getMessage()]
    assert len(skipped) == 2
    assert ":2:" in skipped[0]


def test_replay_stream_keeps_tracking_after_malformed_line(tmp_path) -> None:
    path = tmp_path / "track.jsonl"
    path.write_text(
        json.dumps({"latitude": 28.0, "longitude": -15.0})
        + "\n{not json\n"
        + json.dumps({"latitude": 28.0, "longitude": -15.001})
        + "\n",
        encoding="utf-8",
    )
    publisher = FakePublisher()
    svc = TrackingService(publisher=publisher)
    provider = ReplayPositionProvider(path=path, interval_s=0.0)

    count = asyncio.run(svc.track(provider.positions()))

    assert count == 2
    assert len(publisher.named("location-update")) == 2


def test_replay_provider_missing_file(tmp_path) -> None:
    provider = ReplayPositionProvider(path=tmp_path / "nope.jsonl")
    with pytest.raises(ProviderUnavailable):
        _collect(provider)


def test_logging_error_reporter_maps_severity_to_level(caplog) -> None:
    caplog.set_level(logging.INFO, logger="asset_tracker.errors")
    reporter = LoggingErrorReporter()

    reporter.report(RuntimeError("minor"), severity=ErrorSeverity.LOW, context="a")
    reporter.report(
        RuntimeError("major"),
        severity=ErrorSeverity.HIGH,
        context="b",
        metadata={"attempts": 3},
    )

    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.INFO, logging.ERROR]
    assert caplog.records[1].error_context == "b"
    assert caplog.records[1].error_metadata == {"attempts": 3}
    assert "Error [high]: major" in caplog.records[1].getMessage()


def test_logging_publisher_writes_json(caplog) -> None:
    caplog.set_level(logging.INFO, logger="asset_tracker.publisher")

    asyncio.run(LoggingMessagePublisher().publish("location-update", {"latitude": 1.0}))

    assert 'location-update {"latitude": 1.0}' in caplog.records[0].getMessage()


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "your_google_maps_api_key_here")
    monkeypatch.setenv("FALLBACK_AVERAGE_SPEED_KMH", "30")
    monkeypatch.setenv("BATTERY_OPTIMIZED", "yes")
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = AppConfig.from_env()

    assert cfg.has_maps_key is False
    assert cfg.fallback_average_speed_kmh == 30.0
    assert cfg.battery_optimized is True
    assert cfg.retry_max_attempts == 5
    assert cfg.log_level == "DEBUG"
    assert cfg.publisher_id == "python_publisher"
