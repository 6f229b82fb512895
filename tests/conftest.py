"""
Pytest fixtures for eyeson SDK tests.

Provides an in-memory transport so observer tests run without a network.

Key fixture pattern:
- fake_transport: scripted CableTransport; push frames with .push()
- observer: Observer wired to fake_transport through its transport_factory
- Tests read events with asyncio.wait_for(...) so a hang fails fast
"""

import asyncio
import json

import pytest

from eyeson.client.rest import AsyncRestClient
from eyeson.errors import HandshakeError
from eyeson.platform import Observer


class FakeTransport:
    """CableTransport double fed from an asyncio.Queue.

    Pushed items are returned by receive() in order; exceptions are raised
    instead, None signals a clean close.
    """

    def __init__(self):
        self.url: str | None = None
        self.headers: dict[str, str] | None = None
        self.frames: asyncio.Queue = asyncio.Queue()
        self.connected = False
        self.subscribed_channel: str | None = None
        self.closed = False
        self.connect_error: Exception | None = None
        self.subscribe_error: Exception | None = None

    async def connect(self) -> None:
        if self.connect_error:
            raise self.connect_error
        self.connected = True

    async def subscribe(self, channel: str) -> None:
        if self.subscribe_error:
            raise self.subscribe_error
        self.subscribed_channel = channel

    async def receive(self):
        item = await self.frames.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True

    def push(self, *frames) -> None:
        for frame in frames:
            if isinstance(frame, dict):
                frame = json.dumps(frame)
            self.frames.put_nowait(frame)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def transport_factory(fake_transport):
    """Factory that records url/headers and returns fake_transport."""

    def factory(url: str, headers: dict[str, str]) -> FakeTransport:
        fake_transport.url = url
        fake_transport.headers = headers
        return fake_transport

    return factory


@pytest.fixture
async def rest_client():
    client = AsyncRestClient(api_key="secret-api-key", base_url="https://api.test")
    yield client
    await client.aclose()


@pytest.fixture
def observer(rest_client, transport_factory) -> Observer:
    return Observer(rest_client, transport_factory=transport_factory)


@pytest.fixture
def rejected_subscription(fake_transport):
    """Make the fake transport reject the channel subscription."""
    fake_transport.subscribe_error = HandshakeError("Subscription rejected")
    return fake_transport


@pytest.fixture
def chat_frame() -> dict:
    return {
        "type": "chat",
        "content": "hi",
        "cid": "u1",
        "user_id": "user-1",
        "created_at": "2024-01-01T10:00:00Z",
    }


@pytest.fixture
def room_update_frame() -> dict:
    return {
        "type": "room_update",
        "content": {
            "id": "room-123",
            "name": "Standup",
            "ready": True,
            "started_at": "2024-01-03T09:00:00Z",
            "shutdown": False,
            "guest_token": "guest-abc",
            "options": {"show_names": True},
            "participants": [
                {
                    "id": "p-1",
                    "room_id": "room-123",
                    "name": "Alice",
                    "guest": False,
                    "online": True,
                    "avatar": "https://example.com/a.png",
                }
            ],
            "broadcasts": [],
        },
    }


@pytest.fixture
def participant_frame() -> dict:
    return {
        "type": "participant_update",
        "participant": {
            "id": "p-2",
            "room_id": "room-123",
            "name": "Bob",
            "guest": True,
            "online": True,
            "avatar": None,
        },
    }
