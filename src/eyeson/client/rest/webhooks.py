"""Webhook registration endpoints."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

from eyeson.errors import ApiError

if TYPE_CHECKING:
    from .client import AsyncRestClient

logger = logging.getLogger(__name__)


class WebhookDetails(BaseModel):
    """Configuration of the webhook registered for an API key."""

    model_config = ConfigDict(extra="allow")

    id: str
    url: str
    types: list[str] = []
    last_request_sent_at: Optional[datetime] = None
    last_response_code: Optional[str] = None


class WebhooksApi:
    """Register, inspect and remove the webhook of the current API key."""

    def __init__(self, client: "AsyncRestClient"):
        self._client = client

    async def register(self, url: str, types: list[str] | str) -> None:
        """
        Assign an endpoint URL to the current API key.

        Args:
            url: Endpoint that receives webhook POSTs
            types: Webhook types, e.g. ["room_update", "recording_update"]
        """
        if not isinstance(types, str):
            types = ",".join(types)
        response = await self._client.request(
            "POST", "/webhooks", {"url": url, "types": types}
        )
        if response.status_code != 201:
            raise ApiError(
                response.status_code,
                f"Bad API status code 201, got {response.status_code}",
                response.text,
            )
        logger.info(f"Registered webhook {url} for types: {types}")

    async def get(self) -> WebhookDetails:
        """Details of the registered webhook."""
        response = await self._client.request("GET", "/webhooks")
        if response.status_code != 200:
            raise ApiError(
                response.status_code,
                f"Bad API status code 200, got {response.status_code}",
                response.text,
            )
        return WebhookDetails.model_validate(response.json())

    async def unregister(self) -> None:
        """Remove the current webhook."""
        details = await self.get()
        await self._client.request("DELETE", f"/webhooks/{details.id}")
        logger.info(f"Unregistered webhook {details.id}")
