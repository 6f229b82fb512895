"""
Observer - realtime event stream of a single room.

Observer.connect() opens an ActionCable connection to the room's
RoomChannel and returns a Subscription. The subscription runs one
background receive loop that decodes every frame into a typed event and
queues it for async iteration.

KEY DESIGN:
    - One Subscription per room, one receive task per subscription
    - Events are delivered in the order frames arrive
    - Bad frames are logged and dropped, the loop keeps listening
    - Cancellation is cooperative through an asyncio.Event
    - A transport failure ends the stream and is raised to the consumer
      after the buffered events
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Literal
from urllib.parse import urlencode

from eyeson.client.streaming import ActionCableClient, CableTransport
from eyeson.errors import (
    ConfigurationError,
    FrameError,
    HandshakeError,
    TransportError,
)

from .decoder import decode_frame
from .event import ObserverEvent

if TYPE_CHECKING:
    from eyeson.client.rest import AsyncRestClient

logger = logging.getLogger(__name__)

ROOM_CHANNEL = "RoomChannel"
OBSERVER_PATH = "/rt"
DEFAULT_BUFFER_SIZE = 1000

ObserverState = Literal["connecting", "subscribing", "active", "closing", "closed"]
TransportFactory = Callable[[str, dict[str, str]], CableTransport]
FrameErrorHandler = Callable[[FrameError], None]

# End-of-stream marker, always the last item put on the queue
_END = object()


def observer_url(base_url: str, room_id: str) -> str:
    """
    Realtime endpoint for a room.

    The REST base URL gets the observer path and room_id query appended,
    then its scheme is swapped for the websocket one (https -> wss,
    http -> ws).
    """
    url = f"{base_url.rstrip('/')}{OBSERVER_PATH}?{urlencode({'room_id': room_id})}"
    if url.startswith("https"):
        return "wss" + url[len("https") :]
    if url.startswith("http"):
        return "ws" + url[len("http") :]
    return url


class Observer:
    """
    Connects subscriptions for rooms using a REST client's settings.

    Example:
        observer = Observer(client)
        async with await observer.connect(room_id) as subscription:
            async for event in subscription:
                match event:
                    case ChatEvent(payload=chat):
                        print(f"Chat: {chat.client_id} - {chat.content}")
                    case RoomUpdateEvent(payload=update) if update.content.shutdown:
                        break
    """

    def __init__(
        self,
        client: "AsyncRestClient",
        transport_factory: TransportFactory | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        on_frame_error: FrameErrorHandler | None = None,
    ):
        """
        Args:
            client: REST client supplying base URL and authorization header
            transport_factory: Builds the transport from (url, headers),
                defaults to ActionCableClient
            buffer_size: Maximum number of undelivered events per subscription
            on_frame_error: Called with every frame that could not be decoded
        """
        self._client = client
        self._transport_factory = transport_factory or ActionCableClient
        self.buffer_size = buffer_size
        self.on_frame_error = on_frame_error

    async def connect(
        self, room_id: str, cancel_event: asyncio.Event | None = None
    ) -> Subscription:
        """
        Subscribe to a room's events.

        Returns only once the channel subscription is confirmed.

        Args:
            room_id: Room to observe
            cancel_event: Optional external cancellation signal; setting it
                ends the subscription like Subscription.cancel()

        Raises:
            ConfigurationError: If the client has no base URL
            HandshakeError: If connecting or subscribing fails
        """
        base_url = self._client.base_url
        if not base_url:
            raise ConfigurationError("Client base_url not specified")

        url = observer_url(base_url, room_id)
        transport = self._transport_factory(url, self._client.auth_headers())
        subscription = Subscription(
            room_id,
            transport,
            cancel_event=cancel_event,
            buffer_size=self.buffer_size,
            on_frame_error=self.on_frame_error,
        )
        await subscription.open()
        return subscription


class Subscription:
    """
    One active observer connection bound to one room.

    States: connecting -> subscribing -> active -> closing -> closed.
    Iterate with ``async for``; iteration stops when the subscription is
    closed, or raises TransportError if the connection failed.
    """

    def __init__(
        self,
        room_id: str,
        transport: CableTransport,
        cancel_event: asyncio.Event | None = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        on_frame_error: FrameErrorHandler | None = None,
    ):
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")

        self.room_id = room_id
        self.state: ObserverState = "connecting"
        self._transport = transport
        self._cancel_event = cancel_event or asyncio.Event()
        self._buffer_size = buffer_size
        self._on_frame_error = on_frame_error
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._error: TransportError | None = None
        self._receive_task: asyncio.Task[None] | None = None

    @property
    def error(self) -> TransportError | None:
        """Transport failure that ended the subscription, if any."""
        return self._error

    @property
    def is_active(self) -> bool:
        return self.state == "active"

    @property
    def is_closed(self) -> bool:
        return self.state == "closed"

    # --- Async iterator protocol ---

    def __aiter__(self):
        return self

    async def __anext__(self) -> ObserverEvent:
        """Next event. Blocks until one is available or the stream ended."""
        item = await self._queue.get()
        if item is _END:
            # Keep the marker so later reads end as well
            self._queue.put_nowait(_END)
            if self._error is not None:
                raise self._error
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # --- Lifecycle ---

    async def open(self) -> None:
        """
        Connect, subscribe to the room channel and start the receive loop.

        On failure the transport is closed and the subscription ends in
        the closed state.
        """
        if self.state != "connecting":
            raise RuntimeError(f"Subscription already {self.state}")

        try:
            await self._transport.connect()
            self.state = "subscribing"
            await self._transport.subscribe(ROOM_CHANNEL)
        except asyncio.CancelledError:
            await self._abort()
            raise
        except Exception as e:
            await self._abort()
            logger.warning(f"[Observer] Room {self.room_id}: handshake failed: {e}")
            if isinstance(e, HandshakeError):
                raise
            raise HandshakeError(f"Failed to subscribe: {e}") from e

        self.state = "active"
        logger.info(f"[Observer] Room {self.room_id}: subscription active")
        self._receive_task = asyncio.create_task(
            self._receive_loop(),
            name=f"observer-{self.room_id}",
        )

    def cancel(self) -> None:
        """Request the subscription to end. Returns immediately."""
        self._cancel_event.set()

    async def close(self) -> None:
        """Cancel and wait until the transport is closed."""
        self.cancel()
        if self._receive_task is not None:
            await self._receive_task

    async def wait_closed(self) -> None:
        """Wait until the subscription ended without requesting it."""
        if self._receive_task is not None:
            await asyncio.shield(self._receive_task)

    # --- Receive loop ---

    async def _receive_loop(self) -> None:
        """
        Forward decoded frames until cancelled or the transport ends.

        Waits on the next frame and the cancel event together, so a cancel
        request is seen within one iteration. A frame that arrives after
        cancellation was requested is discarded.
        """
        error: TransportError | None = None
        receive: asyncio.Task | None = None
        cancelled = asyncio.create_task(self._cancel_event.wait())

        try:
            while not self._cancel_event.is_set():
                receive = asyncio.create_task(self._transport.receive())
                await asyncio.wait(
                    {receive, cancelled}, return_when=asyncio.FIRST_COMPLETED
                )
                if self._cancel_event.is_set():
                    break

                frame = receive.result()
                if frame is None:
                    logger.info(f"[Observer] Room {self.room_id}: channel closed")
                    break
                self._handle_frame(frame)

        except TransportError as e:
            logger.warning(f"[Observer] Room {self.room_id}: transport error: {e}")
            error = e
        except asyncio.CancelledError:
            logger.debug(f"[Observer] Room {self.room_id}: receive loop cancelled")
        except Exception as e:
            logger.error(
                f"[Observer] Room {self.room_id}: receive loop failed: {e}",
                exc_info=True,
            )
            error = TransportError(f"Receive loop failed: {e}")
            error.__cause__ = e
        finally:
            cancelled.cancel()
            if receive is not None:
                # No-op when already done; retrieves a late result or error
                receive.cancel()
                await asyncio.gather(receive, return_exceptions=True)
            await self._teardown(error)

    def _handle_frame(self, frame: str | bytes) -> None:
        if not frame:
            return

        try:
            event = decode_frame(frame, room_id=self.room_id)
        except FrameError as e:
            logger.warning(f"[Observer] Room {self.room_id}: dropping frame: {e}")
            self._report_frame_error(e)
            return

        logger.debug(f"[Observer] Room {self.room_id}: received {event.type}")
        if self._queue.qsize() >= self._buffer_size:
            logger.warning(
                f"Event buffer full, dropping {event.type} event for room {self.room_id}"
            )
            return
        self._queue.put_nowait(event)

    def _report_frame_error(self, error: FrameError) -> None:
        if self._on_frame_error is None:
            return
        try:
            self._on_frame_error(error)
        except Exception as e:
            logger.error(
                f"[Observer] Room {self.room_id}: on_frame_error callback failed: {e}",
                exc_info=True,
            )

    async def _teardown(self, error: TransportError | None) -> None:
        self.state = "closing"
        await self._close_transport()
        self._error = error
        self.state = "closed"
        self._queue.put_nowait(_END)
        logger.info(f"[Observer] Room {self.room_id}: subscription closed")

    async def _abort(self) -> None:
        """Close after a failed handshake; iteration then ends at once."""
        await self._close_transport()
        self.state = "closed"
        self._queue.put_nowait(_END)

    async def _close_transport(self) -> None:
        try:
            await self._transport.close()
        except Exception as e:
            logger.warning(
                f"[Observer] Room {self.room_id}: error closing transport: {e}"
            )
