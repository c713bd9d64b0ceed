from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from src.app.ports.output import IErrorReporter
from src.domain.exceptions import NonRetryableError, RetryExhausted
from src.domain.models import ErrorSeverity

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_INITIAL_DELAY_S = 1.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0


@dataclass(slots=True)
class RetryExecutor:
    """Runs an async operation with bounded retries and exponential backoff.

    Attempts run sequentially. The executor keeps no per-call state, so one
    instance can serve any number of concurrent invocations.
    """

    error_reporter: IErrorReporter | None = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def _report(self, error: BaseException, **kwargs) -> None:
        if self.error_reporter is not None:
            self.error_reporter.report(error, **kwargs)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        initial_delay_s: float = DEFAULT_INITIAL_DELAY_S,
        backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER,
        should_retry: Callable[[Exception], bool] | None = None,
        context: str | None = None,
    ) -> T:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        if backoff_multiplier < 1.0:
            raise ValueError(
                f"backoff_multiplier must be >= 1, got {backoff_multiplier}"
            )
        if initial_delay_s < 0.0:
            raise ValueError(f"initial_delay_s must be >= 0, got {initial_delay_s}")

        label = context or "operation"
        delay = float(initial_delay_s)
        attempt = 0

        while True:
            attempt += 1
            try:
                return await operation()
            except Exception as exc:
                if should_retry is not None and not should_retry(exc):
                    self._report(
                        exc,
                        severity=ErrorSeverity.HIGH,
                        context=context,
                        metadata={"attempt": attempt, "retryable": False},
                    )
                    raise NonRetryableError(
                        f"Non-retryable failure on attempt {attempt}: {exc}",
                        attempts=attempt,
                        last_error=exc,
                    ) from exc

                if attempt >= max_attempts:
                    self._report(
                        exc,
                        severity=ErrorSeverity.HIGH,
                        context=context,
                        metadata={"attempts": attempt},
                    )
                    raise RetryExhausted(
                        f"Gave up after {attempt} attempts: {exc}",
                        attempts=attempt,
                        last_error=exc,
                    ) from exc

                self._report(
                    exc,
                    severity=ErrorSeverity.LOW,
                    context=f"{label} (attempt {attempt}/{max_attempts})",
                    metadata={"attempt": attempt, "next_retry_in_s": delay},
                )

            await self.sleep(delay)
            delay *= backoff_multiplier
