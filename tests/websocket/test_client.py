"""
Tests for the ActionCable transport.

The websocket connection is replaced by a mock whose recv() replays a
scripted list of server frames.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK, InvalidURI
from websockets.frames import Close

from eyeson.client.streaming import ACTIONCABLE_SUBPROTOCOL, ActionCableClient
from eyeson.errors import HandshakeError, TransportError

URL = "wss://api.test/rt?room_id=room-123"
IDENTIFIER = json.dumps({"channel": "RoomChannel"})

WELCOME = json.dumps({"type": "welcome"})
CONFIRM = json.dumps({"type": "confirm_subscription", "identifier": IDENTIFIER})
PING = json.dumps({"type": "ping", "message": 1700000000})


def data(message) -> str:
    return json.dumps({"identifier": IDENTIFIER, "message": message})


def closed_ok() -> ConnectionClosedOK:
    return ConnectionClosedOK(Close(1000, ""), Close(1000, ""), True)


def closed_error() -> ConnectionClosedError:
    return ConnectionClosedError(Close(1011, "server error"), None, None)


def mock_ws(*frames):
    """Websocket mock returning ``frames`` from recv(), in order."""
    ws = AsyncMock()
    ws.recv = AsyncMock(side_effect=list(frames))
    ws.send = AsyncMock()
    ws.close = AsyncMock()
    return ws


async def connected_client(ws) -> ActionCableClient:
    with patch(
        "eyeson.client.streaming.client.connect", AsyncMock(return_value=ws)
    ):
        cable = ActionCableClient(URL, {"Authorization": "key"})
        await cable.connect()
        await cable.subscribe("RoomChannel")
    return cable


class TestHandshake:
    async def test_connect_passes_headers_and_subprotocol(self):
        ws = mock_ws(WELCOME)
        connect = AsyncMock(return_value=ws)

        with patch("eyeson.client.streaming.client.connect", connect):
            cable = ActionCableClient(URL, {"Authorization": "key"}, open_timeout=3)
            await cable.connect()

        connect.assert_called_once_with(
            URL,
            additional_headers={"Authorization": "key"},
            subprotocols=[ACTIONCABLE_SUBPROTOCOL],
            open_timeout=3,
        )
        assert cable.is_connected is True

    async def test_connect_failure_raises_handshake_error(self):
        connect = AsyncMock(side_effect=OSError("connection refused"))

        with patch("eyeson.client.streaming.client.connect", connect):
            cable = ActionCableClient(URL)
            with pytest.raises(HandshakeError, match="connection refused"):
                await cable.connect()

    async def test_invalid_uri_raises_handshake_error(self):
        connect = AsyncMock(side_effect=InvalidURI("nope", "not a websocket URI"))

        with patch("eyeson.client.streaming.client.connect", connect):
            with pytest.raises(HandshakeError):
                await ActionCableClient("nope").connect()

    async def test_unauthorized_disconnect_during_connect(self):
        ws = mock_ws(json.dumps({"type": "disconnect", "reason": "unauthorized"}))

        with patch("eyeson.client.streaming.client.connect", AsyncMock(return_value=ws)):
            with pytest.raises(HandshakeError, match="unauthorized"):
                await ActionCableClient(URL).connect()

    async def test_subscribe_sends_command(self):
        ws = mock_ws(WELCOME, PING, CONFIRM)

        cable = await connected_client(ws)

        ws.send.assert_called_once_with(
            json.dumps({"command": "subscribe", "identifier": IDENTIFIER})
        )
        assert cable.identifier == IDENTIFIER

    async def test_rejected_subscription(self):
        ws = mock_ws(WELCOME, json.dumps({"type": "reject_subscription"}))

        with pytest.raises(HandshakeError, match="rejected"):
            await connected_client(ws)

    async def test_closed_during_subscribe(self):
        ws = mock_ws(WELCOME, closed_error())

        with pytest.raises(HandshakeError):
            await connected_client(ws)

    async def test_subscribe_before_connect(self):
        with pytest.raises(HandshakeError, match="Not connected"):
            await ActionCableClient(URL).subscribe("RoomChannel")


class TestReceive:
    async def test_returns_message_data(self):
        ws = mock_ws(WELCOME, CONFIRM, data({"type": "chat", "content": "hi"}))
        cable = await connected_client(ws)

        frame = await cable.receive()

        assert json.loads(frame) == {"type": "chat", "content": "hi"}

    async def test_skips_pings(self):
        ws = mock_ws(WELCOME, CONFIRM, PING, PING, data({"type": "chat"}))
        cable = await connected_client(ws)

        assert json.loads(await cable.receive()) == {"type": "chat"}

    async def test_string_message_passes_through(self):
        ws = mock_ws(WELCOME, CONFIRM, data('{"type":"chat"}'))
        cable = await connected_client(ws)

        assert await cable.receive() == '{"type":"chat"}'

    async def test_message_before_confirmation_is_kept(self):
        ws = mock_ws(WELCOME, data({"type": "room_update"}), CONFIRM, data({"type": "chat"}))
        cable = await connected_client(ws)

        assert json.loads(await cable.receive())["type"] == "room_update"
        assert json.loads(await cable.receive())["type"] == "chat"

    async def test_unparseable_frame_is_returned_raw(self):
        ws = mock_ws(WELCOME, CONFIRM, "garbage{")
        cable = await connected_client(ws)

        assert await cable.receive() == "garbage{"

    async def test_clean_close_returns_none(self):
        ws = mock_ws(WELCOME, CONFIRM, closed_ok())
        cable = await connected_client(ws)

        assert await cable.receive() is None

    async def test_abnormal_close_raises_transport_error(self):
        ws = mock_ws(WELCOME, CONFIRM, closed_error())
        cable = await connected_client(ws)

        with pytest.raises(TransportError, match="Connection lost"):
            await cable.receive()

    async def test_server_disconnect_raises_transport_error(self):
        ws = mock_ws(
            WELCOME, CONFIRM, json.dumps({"type": "disconnect", "reason": "server_restart"})
        )
        cable = await connected_client(ws)

        with pytest.raises(TransportError, match="server_restart"):
            await cable.receive()

    async def test_receive_before_connect(self):
        with pytest.raises(TransportError):
            await ActionCableClient(URL).receive()


class TestClose:
    async def test_close_closes_websocket_once(self):
        ws = mock_ws(WELCOME, CONFIRM)
        cable = await connected_client(ws)

        await cable.close()
        await cable.close()

        ws.close.assert_called_once()
        assert cable.is_connected is False

    async def test_close_without_connect_is_noop(self):
        await ActionCableClient(URL).close()
