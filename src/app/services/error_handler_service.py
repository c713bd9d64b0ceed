from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping

import httpx

from src.app.ports.output import IErrorReporter
from src.domain.exceptions import ConfigurationError, DecodeError
from src.domain.models import AppError, ErrorInfo, ErrorSeverity, RecoveryAction

from .retry_executor import RetryExecutor

logger = logging.getLogger(__name__)

Check = Callable[[], Awaitable[bool]]


async def _always_true() -> bool:
    return True


def _error_text(error: BaseException) -> str:
    return (str(error) or error.__class__.__name__).strip()


def error_info(error: BaseException) -> ErrorInfo:
    """Map an exception to a user-facing title, message and suggestions."""

    if isinstance(error, (httpx.TimeoutException, TimeoutError)):
        return ErrorInfo(
            title="Request Timeout",
            message="The request took too long to complete.",
            suggestions=(
                "Check your internet connection speed",
                "Try again in a few moments",
                "Move to an area with better signal",
            ),
            can_retry=True,
        )

    if isinstance(error, (httpx.TransportError, ConnectionError)):
        return ErrorInfo(
            title="Network Connection Error",
            message="Unable to connect to the internet. Please check your connection.",
            suggestions=(
                "Check your WiFi or mobile data connection",
                "Try moving to an area with better signal",
                "Restart your network connection",
            ),
            can_retry=True,
        )

    if isinstance(error, ConfigurationError):
        return _configuration_info()

    if isinstance(error, (DecodeError, ValueError)):
        return ErrorInfo(
            title="Data Format Error",
            message="Received invalid data from the server.",
            suggestions=(
                "Try refreshing the app",
                "Contact support if the problem continues",
            ),
            can_retry=True,
        )

    text = _error_text(error).lower()
    if "permission" in text:
        return ErrorInfo(
            title="Permission Error",
            message="The app needs permission to access this feature.",
            suggestions=(
                "Enable the required permissions in the system settings",
                "Restart the app after enabling permissions",
            ),
            can_retry=False,
        )
    if "api key" in text or "unauthorized" in text:
        return _configuration_info()

    return ErrorInfo(
        title="Unexpected Error",
        message="Something went wrong. Please try again.",
        suggestions=(
            "Try the action again",
            "Restart the app if the problem continues",
        ),
        can_retry=True,
    )


def _configuration_info() -> ErrorInfo:
    return ErrorInfo(
        title="Configuration Error",
        message="There's an issue with the app configuration.",
        suggestions=(
            "Check your API key configuration",
            "Ensure all required services are enabled",
        ),
        can_retry=False,
    )


@dataclass(slots=True)
class ErrorHandlerService:
    """Reports errors and offers recovery actions.

    Connectivity and last-known-position checks are injected so the service
    stays free of platform code.
    """

    retry_executor: RetryExecutor
    error_reporter: IErrorReporter | None = None
    network_check: Check | None = None
    maps_check: Check | None = None
    last_known_position_check: Check | None = None

    def handle_error(
        self,
        error: BaseException,
        *,
        context: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        metadata: Mapping[str, Any] | None = None,
    ) -> AppError:
        app_error = AppError(
            message=_error_text(error),
            severity=severity,
            timestamp=datetime.now(timezone.utc),
            context=context,
            metadata=metadata,
            original=error,
        )
        if self.error_reporter is not None:
            self.error_reporter.report(
                error, severity=severity, context=context, metadata=metadata
            )
        return app_error

    def recovery_actions(
        self, error: BaseException, context: str | None = None
    ) -> list[RecoveryAction]:
        actions: list[RecoveryAction] = []
        ctx = (context or "").lower()

        if isinstance(error, (httpx.TransportError, ConnectionError)) or (
            "network" in _error_text(error).lower()
        ):
            actions.append(
                RecoveryAction(
                    title="Check Connection",
                    description="Verify your internet connection",
                    action=self.network_check or _always_true,
                )
            )
            actions.append(
                RecoveryAction(
                    title="Switch Network",
                    description="Try switching between WiFi and mobile data",
                    action=_always_true,
                )
            )

        if "location" in ctx:
            actions.append(
                RecoveryAction(
                    title="Use Last Known Location",
                    description="Continue with previously known position",
                    action=self.last_known_position_check or _always_true,
                )
            )

        if "maps" in ctx:
            actions.append(
                RecoveryAction(
                    title="Use Offline Mode",
                    description="Continue with basic location tracking",
                    action=_always_true,
                )
            )
            actions.append(
                RecoveryAction(
                    title="Retry Connection",
                    description="Attempt to reconnect to maps service",
                    action=self.maps_check or _always_true,
                )
            )

        actions.append(
            RecoveryAction(
                title="Retry",
                description="Try the operation again",
                action=_always_true,
            )
        )
        return actions

    async def execute_recovery_action(self, action: RecoveryAction) -> bool:
        try:
            return await self.retry_executor.execute(
                action.action,
                max_attempts=2,
                context=f"Recovery: {action.title}",
            )
        except Exception as exc:
            self.handle_error(exc, context=f"Recovery action failed: {action.title}")
            return False
