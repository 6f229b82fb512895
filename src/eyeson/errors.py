"""
Exception hierarchy for the eyeson SDK.

Setup failures (ConfigurationError, HandshakeError) are raised directly from
Observer.connect(). Per-frame failures (FrameError subclasses) are logged and
dropped by the receive loop. TransportError ends a subscription and is
re-raised to the consumer when it reaches the end of the event stream.
"""

from __future__ import annotations


class EyesonError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(EyesonError):
    """Raised when the client is missing settings needed for a request."""


class HandshakeError(EyesonError):
    """Raised when the realtime connection or channel subscription fails."""


class TransportError(EyesonError):
    """Raised when an active realtime connection drops or errors."""


class FrameError(EyesonError):
    """Base class for frames the observer could not turn into an event."""

    def __init__(self, message: str, frame: str | bytes | None = None):
        super().__init__(message)
        self.frame = frame


class MalformedFrame(FrameError):
    """Frame is not a JSON object with a string ``type`` field."""


class UnknownEventType(FrameError):
    """Frame carries a discriminator outside the known event table."""

    def __init__(self, event_type: str, frame: str | bytes | None = None):
        super().__init__(f"Event type '{event_type}' not supported", frame)
        self.event_type = event_type


class PayloadDecodeError(FrameError):
    """Frame has a known discriminator but its payload failed validation."""

    def __init__(
        self, event_type: str, message: str, frame: str | bytes | None = None
    ):
        super().__init__(message, frame)
        self.event_type = event_type


class ApiError(EyesonError):
    """Raised when the REST API answers with an unexpected status code."""

    def __init__(self, status_code: int, message: str, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(ApiError):
    """404 - resource does not exist or expired."""


class UnauthorizedError(ApiError):
    """401 - API key rejected."""


class ForbiddenError(ApiError):
    """403 - request parameters rejected."""


class WebhookSignatureError(EyesonError):
    """Raised when a webhook body does not match its signature header."""
