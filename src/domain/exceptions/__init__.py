from .retry import NonRetryableError, RetryError, RetryExhausted
from .routing import ConfigurationError, DecodeError, ProviderUnavailable, TrackingError

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "NonRetryableError",
    "ProviderUnavailable",
    "RetryError",
    "RetryExhausted",
    "TrackingError",
]
