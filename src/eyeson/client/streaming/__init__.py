"""eyeson realtime streaming SDK.

This module provides the ActionCable transport used by the observer and the
payload models of the frames it carries.

Usage:
    from eyeson.client.streaming import ActionCableClient, ChatPayload
"""

from eyeson.client.streaming.client import (
    ACTIONCABLE_SUBPROTOCOL,
    ActionCableClient,
    CableTransport,
)
from eyeson.client.streaming.payloads import (
    Broadcast,
    BroadcastUpdatePayload,
    ChatPayload,
    EventRoom,
    EventUser,
    Links,
    ObserverModel,
    Options,
    OptionsUpdatePayload,
    Participant,
    ParticipantUpdatePayload,
    Playback,
    PlaybackUpdatePayload,
    PodiumPosition,
    PodiumUpdatePayload,
    Recording,
    RecordingUpdatePayload,
    RoomUpdatePayload,
    Snapshot,
    SnapshotUpdatePayload,
)

__all__ = [
    "ACTIONCABLE_SUBPROTOCOL",
    "ActionCableClient",
    "CableTransport",
    "Broadcast",
    "BroadcastUpdatePayload",
    "ChatPayload",
    "EventRoom",
    "EventUser",
    "Links",
    "ObserverModel",
    "Options",
    "OptionsUpdatePayload",
    "Participant",
    "ParticipantUpdatePayload",
    "Playback",
    "PlaybackUpdatePayload",
    "PodiumPosition",
    "PodiumUpdatePayload",
    "Recording",
    "RecordingUpdatePayload",
    "RoomUpdatePayload",
    "Snapshot",
    "SnapshotUpdatePayload",
]
