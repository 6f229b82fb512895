"""
Observer events using tagged union pattern.

Events are strongly typed using discriminated unions, enabling type-safe
pattern matching and automatic type narrowing. ``type`` is the wire
discriminator of every variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from eyeson.client.streaming import (
    BroadcastUpdatePayload,
    ChatPayload,
    OptionsUpdatePayload,
    ParticipantUpdatePayload,
    PlaybackUpdatePayload,
    PodiumUpdatePayload,
    RecordingUpdatePayload,
    RoomUpdatePayload,
    SnapshotUpdatePayload,
)


@dataclass
class RoomUpdateEvent:
    """Room properties changed."""

    type: Literal["room_update"] = "room_update"
    room_id: str | None = None
    payload: RoomUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class ParticipantUpdateEvent:
    """A participant joined, left or changed online status."""

    type: Literal["participant_update"] = "participant_update"
    room_id: str | None = None
    payload: ParticipantUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class PodiumUpdateEvent:
    """Podium layout or participant positions changed."""

    type: Literal["podium_update"] = "podium_update"
    room_id: str | None = None
    payload: PodiumUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class RecordingUpdateEvent:
    """Recording started or stopped."""

    type: Literal["recording_update"] = "recording_update"
    room_id: str | None = None
    payload: RecordingUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class BroadcastUpdateEvent:
    """Live-stream broadcasts changed."""

    type: Literal["broadcasts_update"] = "broadcasts_update"
    room_id: str | None = None
    payload: BroadcastUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class OptionsUpdateEvent:
    """Room options modified or added."""

    type: Literal["options_update"] = "options_update"
    room_id: str | None = None
    payload: OptionsUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class SnapshotUpdateEvent:
    """New snapshot taken."""

    type: Literal["snapshots_update"] = "snapshots_update"
    room_id: str | None = None
    payload: SnapshotUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class PlaybackUpdateEvent:
    """Playback started."""

    type: Literal["playback_update"] = "playback_update"
    room_id: str | None = None
    payload: PlaybackUpdatePayload | None = None
    raw: dict[str, Any] | None = None


@dataclass
class ChatEvent:
    """Chat message."""

    type: Literal["chat"] = "chat"
    room_id: str | None = None
    payload: ChatPayload | None = None
    raw: dict[str, Any] | None = None


# Union type for all observer events
ObserverEvent = (
    RoomUpdateEvent
    | ParticipantUpdateEvent
    | PodiumUpdateEvent
    | RecordingUpdateEvent
    | BroadcastUpdateEvent
    | OptionsUpdateEvent
    | SnapshotUpdateEvent
    | PlaybackUpdateEvent
    | ChatEvent
)
