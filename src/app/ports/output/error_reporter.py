from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from src.domain.models import ErrorSeverity


class IErrorReporter(ABC):
    """Fire-and-forget sink for (message, severity, context) reports."""

    @abstractmethod
    def report(
        self,
        error: BaseException,
        *,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        raise NotImplementedError
