from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncIterator, Mapping

from src.app.ports.output import IPositionProvider
from src.domain.exceptions import ProviderUnavailable
from src.domain.models import Position

logger = logging.getLogger(__name__)


def _parse_position(row: Mapping[str, Any]) -> Position:
    ts_raw = row.get("timestamp")
    timestamp = None
    if isinstance(ts_raw, str) and ts_raw:
        timestamp = datetime.fromisoformat(ts_raw)
    elif isinstance(ts_raw, (int, float)):
        timestamp = datetime.fromtimestamp(float(ts_raw) / 1000.0)

    altitude = row.get("altitude")
    return Position(
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        accuracy=float(row.get("accuracy") or 0.0),
        speed=float(row.get("speed") or 0.0),
        heading=float(row.get("heading") or 0.0) % 360.0,
        altitude=float(altitude) if altitude is not None else None,
        timestamp=timestamp,
    )


@dataclass(slots=True)
class ReplayPositionProvider(IPositionProvider):
    """Replays recorded positions from a JSON-lines file.

    Env vars:
      - POSITION_REPLAY_PATH: file with one JSON object per line
        (latitude, longitude, accuracy, speed, heading, altitude, timestamp)
      - POSITION_REPLAY_INTERVAL_S: pause between positions (default 0)
    """

    path: str | Path | None = None
    interval_s: float | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("POSITION_REPLAY_PATH")
        if not value:
            raise ProviderUnavailable("Missing POSITION_REPLAY_PATH")
        return Path(value)

    def _interval(self) -> float:
        if self.interval_s is not None:
            return self.interval_s
        raw = (os.getenv("POSITION_REPLAY_INTERVAL_S") or "").strip()
        return float(raw) if raw else 0.0

    async def positions(self) -> AsyncIterator[Position]:
        path = self._path()
        if not path.exists():
            raise ProviderUnavailable(f"Position replay file not found: {path}")

        interval = self._interval()
        first = True
        with path.open("r", encoding="utf-8") as fp:
            for lineno, line in enumerate(fp, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    position = _parse_position(json.loads(line))
                except (ValueError, KeyError, TypeError, AttributeError) as exc:
                    logger.warning(
                        "Skipping malformed replay line %s:%d: %s", path, lineno, exc
                    )
                    continue
                if not first and interval > 0:
                    await asyncio.sleep(interval)
                first = False
                yield position
