from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class IMessagePublisher(ABC):
    """Messaging port for outbound tracking records (pub/sub channel)."""

    @abstractmethod
    async def publish(self, name: str, data: Mapping[str, Any]) -> None:
        """Publish one named message."""
