"""
Frame decoding for the observer.

A frame is decoded in two phases: first only the ``type`` discriminator is
read, then the whole frame is validated against the payload model registered
for that discriminator. Unknown fields are ignored at both steps.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, ValidationError

from eyeson.client.streaming import (
    BroadcastUpdatePayload,
    ChatPayload,
    ObserverModel,
    OptionsUpdatePayload,
    ParticipantUpdatePayload,
    PlaybackUpdatePayload,
    PodiumUpdatePayload,
    RecordingUpdatePayload,
    RoomUpdatePayload,
    SnapshotUpdatePayload,
)
from eyeson.errors import MalformedFrame, PayloadDecodeError, UnknownEventType

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


class EventEnvelope(BaseModel):
    """First decode phase: the discriminator only."""

    model_config = ConfigDict(extra="ignore")

    type: str


class EventType(NamedTuple):
    """Registry entry: event variant and the payload model it carries."""

    event: type
    payload: type[ObserverModel]


EVENT_TYPES: Mapping[str, EventType] = MappingProxyType(
    {
        "room_update": EventType(RoomUpdateEvent, RoomUpdatePayload),
        "participant_update": EventType(
            ParticipantUpdateEvent, ParticipantUpdatePayload
        ),
        "podium_update": EventType(PodiumUpdateEvent, PodiumUpdatePayload),
        "recording_update": EventType(RecordingUpdateEvent, RecordingUpdatePayload),
        "broadcasts_update": EventType(BroadcastUpdateEvent, BroadcastUpdatePayload),
        "options_update": EventType(OptionsUpdateEvent, OptionsUpdatePayload),
        "snapshots_update": EventType(SnapshotUpdateEvent, SnapshotUpdatePayload),
        "playback_update": EventType(PlaybackUpdateEvent, PlaybackUpdatePayload),
        "chat": EventType(ChatEvent, ChatPayload),
    }
)


def lookup(event_type: str) -> EventType | None:
    """Registry entry for a discriminator, None if it is not supported."""
    return EVENT_TYPES.get(event_type)


def decode_frame(
    frame: str | bytes | bytearray, room_id: str | None = None
) -> ObserverEvent:
    """
    Decode one raw frame into a typed observer event.

    Args:
        frame: Raw JSON frame as received from the transport
        room_id: Room the frame was received for, copied onto the event

    Returns:
        The matching event variant with its validated payload

    Raises:
        MalformedFrame: Frame is not a JSON object with a string ``type``
        UnknownEventType: ``type`` is not in EVENT_TYPES
        PayloadDecodeError: Payload does not match the variant's model
    """
    try:
        data = json.loads(frame)
    except (ValueError, TypeError) as e:
        raise MalformedFrame(f"Failed to unmarshal frame: {e}", frame) from e
    if not isinstance(data, dict):
        raise MalformedFrame(
            f"Expected JSON object, got {type(data).__name__}", frame
        )

    try:
        envelope = EventEnvelope.model_validate(data)
    except ValidationError as e:
        raise MalformedFrame("Frame has no valid 'type' field", frame) from e

    entry = lookup(envelope.type)
    if entry is None:
        raise UnknownEventType(envelope.type, frame)

    try:
        payload = entry.payload.model_validate(data)
    except ValidationError as e:
        raise PayloadDecodeError(
            envelope.type,
            f"Failed to decode {envelope.type} payload: {e.error_count()} errors",
            frame,
        ) from e

    return entry.event(room_id=room_id, payload=payload, raw=data)
