from datetime import datetime
from types import NoneType
from typing import Any, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Observer frame payloads (based on messages sent on the RoomChannel)
# Using Pydantic for runtime validation. Every field has a default so a
# frame carrying only part of an object still decodes.


class ObserverModel(BaseModel):
    """Base for all observer payload models."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True
    )  # Allow extra fields backend might add later

    @model_validator(mode="before")
    @classmethod
    def null_means_default(cls, data: Any) -> Any:
        """Treat ``null`` like a missing key for fields that can't hold None."""
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None or cls._accepts_none(key)
        }

    @classmethod
    def _accepts_none(cls, key: str) -> bool:
        for name, field in cls.model_fields.items():
            if key in (name, field.alias):
                return NoneType in get_args(field.annotation)
        # Extra keys are kept as sent
        return True


class Options(ObserverModel):
    """Room options."""

    show_names: bool = False


class Participant(ObserverModel):
    """A participating user and its online status."""

    id: str = ""
    room_id: str = ""
    name: str = ""
    guest: bool = False
    online: bool = False
    avatar: Optional[str] = None


class EventUser(ObserverModel):
    """User reference inside recordings, broadcasts and snapshots."""

    id: str = ""
    name: str = ""
    guest: bool = False
    avatar: Optional[str] = None
    joined_at: Optional[datetime] = None


class EventRoom(ObserverModel):
    """Room state as sent with room updates."""

    id: str = ""
    name: str = ""
    ready: bool = False
    started_at: Optional[datetime] = None
    shutdown: bool = False
    guest_token: Optional[str] = None
    options: Options = Field(default_factory=Options)
    participants: list[Participant] = Field(default_factory=list)
    broadcasts: list["Broadcast"] = Field(default_factory=list)


class PodiumPosition(ObserverModel):
    """Area on the podium belonging to a user."""

    user_id: str = ""
    play_id: Optional[str] = None
    width: int = 0
    height: int = 0
    left: int = 0
    top: int = 0
    z_index: int = Field(default=0, alias="z-index")


class Broadcast(ObserverModel):
    """Live-stream broadcast."""

    id: str = ""
    platform: str = ""
    player_url: str = ""
    user: EventUser = Field(default_factory=EventUser)
    room: EventRoom = Field(default_factory=EventRoom)


class Links(ObserverModel):
    self_: Optional[str] = Field(default=None, alias="self")
    download: Optional[str] = None


class Recording(ObserverModel):
    """Recording of a room. ``created_at`` is a unix timestamp."""

    id: str = ""
    created_at: int = 0
    duration: int = 0
    links: Links = Field(default_factory=Links)
    user: EventUser = Field(default_factory=EventUser)
    room: EventRoom = Field(default_factory=EventRoom)


class Snapshot(ObserverModel):
    id: str = ""
    name: str = ""
    links: Links = Field(default_factory=Links)
    creator: EventUser = Field(default_factory=EventUser)
    created_at: Optional[datetime] = None
    room: EventRoom = Field(default_factory=EventRoom)


class Playback(ObserverModel):
    """Media injected into the conference."""

    url: str = ""
    play_id: str = ""
    audio: bool = False


EventRoom.model_rebuild()
Broadcast.model_rebuild()


class RoomUpdatePayload(ObserverModel):
    """Payload for room_update frames, sent when any room property changes."""

    type: str = "room_update"
    content: EventRoom = Field(default_factory=EventRoom)


class ParticipantUpdatePayload(ObserverModel):
    """Payload for participant_update frames."""

    type: str = "participant_update"
    participant: Participant = Field(default_factory=Participant)


class PodiumUpdatePayload(ObserverModel):
    """Payload for podium_update frames (layout or positions changed)."""

    type: str = "podium_update"
    podium: list[PodiumPosition] = Field(default_factory=list)


class RecordingUpdatePayload(ObserverModel):
    """Payload for recording_update frames (recording started or stopped)."""

    type: str = "recording_update"
    recording: Recording = Field(default_factory=Recording)


class BroadcastUpdatePayload(ObserverModel):
    """Payload for broadcasts_update frames."""

    type: str = "broadcasts_update"
    broadcasts: list[Broadcast] = Field(default_factory=list)


class OptionsUpdatePayload(ObserverModel):
    """Payload for options_update frames."""

    type: str = "options_update"
    options: Options = Field(default_factory=Options)


class SnapshotUpdatePayload(ObserverModel):
    """Payload for snapshots_update frames."""

    type: str = "snapshots_update"
    snapshots: list[Snapshot] = Field(default_factory=list)


class PlaybackUpdatePayload(ObserverModel):
    """Payload for playback_update frames."""

    type: str = "playback_update"
    playing: Playback = Field(default_factory=Playback)


class ChatPayload(ObserverModel):
    """Payload for chat frames. ``cid`` on the wire is the client id."""

    type: str = "chat"
    content: str = ""
    client_id: str = Field(default="", alias="cid")
    user_id: str = ""
    created_at: Optional[datetime] = None
