"""
eyeson SDK - Observe and control eyeson video meetings.

Client Layer:
    AsyncRestClient: API key, endpoint and REST requests (webhooks via .webhooks)
    ActionCableClient: Realtime transport used by the observer

Platform Layer:
    Observer: Connects to a room's realtime event channel
    Subscription: Async iterator over the room's events
    ObserverEvent: Typed events (RoomUpdateEvent, ChatEvent, ...)
    parse_webhook: Verify and decode webhook requests

Example:
    from eyeson import AsyncRestClient, Observer
    from eyeson.platform import ChatEvent, RoomUpdateEvent

    client = AsyncRestClient(api_key="...")
    observer = Observer(client)

    async with await observer.connect(room_id) as subscription:
        async for event in subscription:
            match event:
                case ChatEvent(payload=chat):
                    print(f"{chat.client_id}: {chat.content}")
                case RoomUpdateEvent(payload=update) if update.content.shutdown:
                    break
"""

from .client import ActionCableClient, AsyncRestClient
from .errors import (
    ApiError,
    ConfigurationError,
    EyesonError,
    FrameError,
    HandshakeError,
    MalformedFrame,
    PayloadDecodeError,
    TransportError,
    UnknownEventType,
    WebhookSignatureError,
)
from .platform import (
    Observer,
    ObserverEvent,
    Subscription,
    Webhook,
    decode_frame,
    parse_webhook,
)

__all__ = [
    # Client
    "AsyncRestClient",
    "ActionCableClient",
    # Platform
    "Observer",
    "ObserverEvent",
    "Subscription",
    "Webhook",
    "decode_frame",
    "parse_webhook",
    # Errors
    "EyesonError",
    "ApiError",
    "ConfigurationError",
    "HandshakeError",
    "TransportError",
    "FrameError",
    "MalformedFrame",
    "UnknownEventType",
    "PayloadDecodeError",
    "WebhookSignatureError",
]

__version__ = "0.0.1"
