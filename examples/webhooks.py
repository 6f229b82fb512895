#!/usr/bin/env python3
"""
Manage the webhook of an eyeson API key.

Usage:
    uv run python examples/webhooks.py register https://example.com/hook --types room_update,recording_update
    uv run python examples/webhooks.py show
    uv run python examples/webhooks.py unregister
"""

import argparse
import asyncio
import logging
import os

from dotenv import load_dotenv

from setup_logging import setup_logging

from eyeson import AsyncRestClient
from eyeson.client.rest import DEFAULT_ENDPOINT
from eyeson.platform import WEBHOOK_RECORDING, WEBHOOK_ROOM

load_dotenv()


async def run(args: argparse.Namespace, api_key: str, endpoint: str) -> None:
    async with AsyncRestClient(api_key=api_key, base_url=endpoint) as client:
        if args.command == "register":
            await client.webhooks.register(args.url, args.types)
            print(f"Registered {args.url}")
        elif args.command == "show":
            details = await client.webhooks.get()
            print(f"{details.id}: {details.url} types={','.join(details.types)}")
            if details.last_request_sent_at:
                print(
                    f"Last request at {details.last_request_sent_at} "
                    f"-> {details.last_response_code}"
                )
        elif args.command == "unregister":
            await client.webhooks.unregister()
            print("Webhook removed")


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage the eyeson webhook")
    sub = parser.add_subparsers(dest="command", required=True)
    register = sub.add_parser("register")
    register.add_argument("url")
    register.add_argument(
        "--types", default=f"{WEBHOOK_ROOM},{WEBHOOK_RECORDING}"
    )
    sub.add_parser("show")
    sub.add_parser("unregister")
    args = parser.parse_args()

    setup_logging(logging.INFO)

    api_key = os.getenv("EYESON_API_KEY", "")
    if not api_key:
        print("Error: Please set the environment variable EYESON_API_KEY")
        return
    endpoint = os.getenv("EYESON_API_ENDPOINT", DEFAULT_ENDPOINT)
    asyncio.run(run(args, api_key, endpoint))


if __name__ == "__main__":
    main()
