from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from src.app.ports.output import IErrorReporter
from src.domain.models import ErrorSeverity

_LEVELS: Mapping[ErrorSeverity, int] = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


@dataclass(slots=True)
class LoggingErrorReporter(IErrorReporter):
    """Reports errors to the standard logging system."""

    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("asset_tracker.errors")
    )

    def report(
        self,
        error: BaseException,
        *,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        message = (str(error) or error.__class__.__name__).removeprefix("Exception: ")
        self.logger.log(
            _LEVELS[severity],
            "Error [%s]: %s",
            severity.value,
            message,
            extra={
                "error_context": context,
                "error_metadata": dict(metadata or {}),
                "error_type": type(error).__name__,
            },
        )
