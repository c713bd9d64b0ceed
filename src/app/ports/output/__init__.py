from .directions_provider import IDirectionsProvider
from .error_reporter import IErrorReporter
from .message_publisher import IMessagePublisher
from .position_provider import IPositionProvider

__all__ = [
    "IDirectionsProvider",
    "IErrorReporter",
    "IMessagePublisher",
    "IPositionProvider",
]
