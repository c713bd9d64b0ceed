from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Mapping

from .status import ErrorSeverity


@dataclass(frozen=True, slots=True)
class AppError:
    message: str
    severity: ErrorSeverity
    timestamp: datetime
    context: str | None = None
    metadata: Mapping[str, Any] | None = None
    original: BaseException | None = None


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """User-facing description of a failure."""

    title: str
    message: str
    suggestions: tuple[str, ...] = ()
    can_retry: bool = True


@dataclass(frozen=True, slots=True)
class RecoveryAction:
    title: str
    description: str
    action: Callable[[], Awaitable[bool]] = field(repr=False)
