from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator

from src.domain.models import Position


class IPositionProvider(ABC):
    """Port for device positions (e.g., GPS)."""

    @abstractmethod
    def positions(self) -> AsyncIterator[Position]:
        """Yield positions in arrival order until the stream ends or is cancelled."""
