import asyncio
import json
import logging
from collections import deque
from typing import Optional, Protocol, Union

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from eyeson.errors import HandshakeError, TransportError

logger = logging.getLogger(__name__)

ACTIONCABLE_SUBPROTOCOL = "actioncable-v1-json"

# Control frames the server sends besides channel data
_IGNORED_TYPES = {"welcome", "ping", "confirm_subscription"}


class CableTransport(Protocol):
    """Duplex pub/sub connection used by the observer.

    ``receive`` returns the raw data of the next channel message, or None
    once the server closed the connection cleanly. Failures raise
    TransportError.
    """

    async def connect(self) -> None: ...

    async def subscribe(self, channel: str) -> None: ...

    async def receive(self) -> Optional[Union[str, bytes]]: ...

    async def close(self) -> None: ...


class ActionCableClient:
    """Minimal ActionCable client on top of ``websockets``.

    Example:
        cable = ActionCableClient("wss://api.eyeson.team/rt?room_id=abc", headers)
        await cable.connect()
        await cable.subscribe("RoomChannel")
        while (message := await cable.receive()) is not None:
            ...
        await cable.close()
    """

    def __init__(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        open_timeout: float = 10.0,
        handshake_timeout: float = 10.0,
    ):
        self.url = url
        self.headers = headers or {}
        self.open_timeout = open_timeout
        self.handshake_timeout = handshake_timeout
        self.identifier: Optional[str] = None
        self._ws: Optional[ClientConnection] = None
        # Data frames that arrive before confirm_subscription
        self._pending: deque[str] = deque()

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def connect(self) -> None:
        """Open the websocket and wait for the server's welcome frame."""
        logger.info(f"[ActionCable] Connecting to {self.url}")
        try:
            self._ws = await connect(
                self.url,
                additional_headers=self.headers,
                subprotocols=[ACTIONCABLE_SUBPROTOCOL],
                open_timeout=self.open_timeout,
            )
        except (WebSocketException, OSError, asyncio.TimeoutError) as e:
            raise HandshakeError(f"Failed to connect to {self.url}: {e}") from e

        try:
            await asyncio.wait_for(self._await_type("welcome"), self.handshake_timeout)
        except asyncio.TimeoutError as e:
            raise HandshakeError("Timed out waiting for welcome") from e
        logger.debug("[ActionCable] Welcome received")

    async def subscribe(self, channel: str) -> None:
        """Subscribe to a channel and wait until the server confirms it."""
        if not self._ws:
            raise HandshakeError("Not connected")

        self.identifier = json.dumps({"channel": channel})
        logger.info(f"[ActionCable] Subscribing to channel: {channel}")
        try:
            await self._ws.send(
                json.dumps({"command": "subscribe", "identifier": self.identifier})
            )
            await asyncio.wait_for(
                self._await_type("confirm_subscription"), self.handshake_timeout
            )
        except ConnectionClosed as e:
            raise HandshakeError(f"Connection closed while subscribing: {e}") from e
        except asyncio.TimeoutError as e:
            raise HandshakeError(f"Timed out subscribing to {channel}") from e
        logger.info(f"[ActionCable] Subscribed to channel: {channel}")

    async def _await_type(self, expected: str) -> None:
        """Read frames until one of the expected control type arrives."""
        while True:
            try:
                raw = await self._ws.recv()
            except ConnectionClosed as e:
                raise HandshakeError(f"Connection closed during handshake: {e}") from e

            frame = _parse(raw)
            if frame is None:
                continue
            frame_type = frame.get("type")
            if frame_type == expected:
                return
            if frame_type == "reject_subscription":
                raise HandshakeError("Subscription rejected")
            if frame_type == "disconnect":
                raise HandshakeError(
                    f"Server disconnected: {frame.get('reason', 'unknown')}"
                )
            if "message" in frame and frame_type is None:
                self._pending.append(_message_data(frame["message"]))

    async def receive(self) -> Optional[Union[str, bytes]]:
        """Return the raw data of the next channel message."""
        if self._pending:
            return self._pending.popleft()
        if not self._ws:
            raise TransportError("Not connected")

        while True:
            try:
                raw = await self._ws.recv()
            except ConnectionClosedOK:
                logger.info("[ActionCable] Connection closed by server")
                return None
            except ConnectionClosed as e:
                raise TransportError(f"Connection lost: {e}") from e

            frame = _parse(raw)
            if frame is None:
                # Let the frame decoder report it
                return raw

            frame_type = frame.get("type")
            if frame_type in _IGNORED_TYPES:
                continue
            if frame_type == "disconnect":
                raise TransportError(
                    f"Server disconnected: {frame.get('reason', 'unknown')}"
                )
            if "message" not in frame:
                logger.debug(f"[ActionCable] Ignoring frame without message: {raw!r}")
                continue
            return _message_data(frame["message"])

    async def close(self) -> None:
        if self._ws is None:
            return
        ws, self._ws = self._ws, None
        await ws.close()
        logger.info("[ActionCable] Connection closed")


def _parse(raw: Union[str, bytes]) -> Optional[dict]:
    try:
        frame = json.loads(raw)
    except ValueError:
        return None
    return frame if isinstance(frame, dict) else None


def _message_data(message) -> str:
    if isinstance(message, str):
        return message
    return json.dumps(message)
