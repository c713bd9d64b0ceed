class TrackingError(Exception):
    """Base exception for the tracking publisher."""


class DecodeError(TrackingError, ValueError):
    """Raised when an encoded polyline is malformed."""


class ProviderUnavailable(TrackingError):
    """Raised when a directions or location provider returns no usable data."""


class ConfigurationError(TrackingError):
    """Raised when a required setting (e.g. an API key) is missing."""
