#!/usr/bin/env python3
"""
Observe a running eyeson room.

Connects to the room's realtime channel and prints every event. Exits when
the room shuts down or on Ctrl+C.

Usage:
    uv run python examples/observer.py --room-id <room id>
    uv run python examples/observer.py --room-id <room id> --api-endpoint http://localhost:8000
    uv run python examples/observer.py --room-id <room id> --config default

Setup:
    Set EYESON_API_KEY (and optionally EYESON_API_ENDPOINT) in .env,
    or configure an account in eyeson_config.yaml and pass --config.
"""

import argparse
import asyncio
import logging
import os

from dotenv import load_dotenv

from setup_logging import setup_logging

from eyeson import AsyncRestClient, Observer, Subscription
from eyeson.client.rest import DEFAULT_ENDPOINT
from eyeson.config import load_client_config
from eyeson.errors import FrameError, TransportError
from eyeson.platform import ChatEvent, ParticipantUpdateEvent, RoomUpdateEvent

load_dotenv()

logger = logging.getLogger("eyeson.examples.observer")


def report_bad_frame(error: FrameError) -> None:
    print(f"Dropped frame: {error}")


async def print_events(subscription: Subscription) -> None:
    """Print events until the room shuts down or the channel closes."""
    try:
        async for event in subscription:
            print(f"Received event type: {event.type}")
            match event:
                case ParticipantUpdateEvent(payload=update):
                    participant = update.participant
                    print(f"user {participant.name} is online {participant.online}")
                case RoomUpdateEvent(payload=update):
                    room = update.content
                    print(f"Room {room.name} is ready {room.ready}")
                    if room.shutdown:
                        print(f"Room {room.name} is shutting down now.")
                        return
                case ChatEvent(payload=chat):
                    print(f"Chat: {chat.client_id} - {chat.content}")
    except TransportError as e:
        print(f"Channel closed: {e}")


async def observe(api_key: str, endpoint: str, room_id: str) -> None:
    async with AsyncRestClient(api_key=api_key, base_url=endpoint) as client:
        observer = Observer(client, on_frame_error=report_bad_frame)
        async with await observer.connect(room_id) as subscription:
            await print_events(subscription)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print events of an eyeson room")
    parser.add_argument("--room-id", required=True, help="Room identifier")
    parser.add_argument("--api-endpoint", default=None, help="Optional API endpoint")
    parser.add_argument("--config", default=None, help="Key in eyeson_config.yaml")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    if args.config:
        api_key, endpoint = load_client_config(args.config)
    else:
        api_key = os.getenv("EYESON_API_KEY", "")
        endpoint = os.getenv("EYESON_API_ENDPOINT", DEFAULT_ENDPOINT)
        if not api_key:
            print("Error: Please set the environment variable EYESON_API_KEY")
            return
    if args.api_endpoint:
        endpoint = args.api_endpoint

    try:
        asyncio.run(observe(api_key, endpoint, args.room_id))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
