"""
eyeson Platform Layer - realtime events and webhooks.

Components:
    Observer: Connects room subscriptions using a REST client's settings
    Subscription: Async iterator over one room's events
    ObserverEvent: Tagged union of all observer events
    decode_frame: Raw frame -> typed event
    parse_webhook: Signature check + typed decode of webhook bodies
"""

from .decoder import EVENT_TYPES, EventEnvelope, EventType, decode_frame, lookup
from .event import (
    BroadcastUpdateEvent,
    ChatEvent,
    ObserverEvent,
    OptionsUpdateEvent,
    ParticipantUpdateEvent,
    PlaybackUpdateEvent,
    PodiumUpdateEvent,
    RecordingUpdateEvent,
    RoomUpdateEvent,
    SnapshotUpdateEvent,
)
from .observer import Observer, Subscription, observer_url
from .webhook import (
    SIGNATURE_HEADER,
    WEBHOOK_RECORDING,
    WEBHOOK_ROOM,
    WEBHOOK_SNAPSHOT,
    Webhook,
    compute_signature,
    parse_webhook,
    verify_signature,
)

__all__ = [
    "EVENT_TYPES",
    "EventEnvelope",
    "EventType",
    "decode_frame",
    "lookup",
    "BroadcastUpdateEvent",
    "ChatEvent",
    "ObserverEvent",
    "OptionsUpdateEvent",
    "ParticipantUpdateEvent",
    "PlaybackUpdateEvent",
    "PodiumUpdateEvent",
    "RecordingUpdateEvent",
    "RoomUpdateEvent",
    "SnapshotUpdateEvent",
    "Observer",
    "Subscription",
    "observer_url",
    "SIGNATURE_HEADER",
    "WEBHOOK_RECORDING",
    "WEBHOOK_ROOM",
    "WEBHOOK_SNAPSHOT",
    "Webhook",
    "compute_signature",
    "parse_webhook",
    "verify_signature",
]
