from __future__ import annotations

from .routing import TrackingError


class RetryError(TrackingError):
    """A retried operation failed for good."""

    def __init__(self, message: str, *, attempts: int, last_error: BaseException):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class RetryExhausted(RetryError):
    """Raised when every attempt of a retried operation failed."""


class NonRetryableError(RetryError):
    """Raised when a failure was classified as not worth retrying."""
