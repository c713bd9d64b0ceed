from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from src.app.ports.output import IMessagePublisher


@dataclass(slots=True)
class LoggingMessagePublisher(IMessagePublisher):
    """Writes outbound messages to the log as JSON.

    Stand-in for a real pub/sub channel during development.
    """

    channel: str = "asset-tracking"
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("asset_tracker.publisher")
    )

    async def publish(self, name: str, data: Mapping[str, Any]) -> None:
        body = json.dumps(dict(data), default=str, sort_keys=True)
        self.logger.info("[%s] %s %s", self.channel, name, body)
