"""
Inbound webhook verification.

eyeson signs every webhook body with HMAC-SHA256 keyed by the API key and
sends the hex digest in the X-Eyeson-Signature header.
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eyeson.errors import WebhookSignatureError

WEBHOOK_ROOM = "room_update"
WEBHOOK_RECORDING = "recording_update"
WEBHOOK_SNAPSHOT = "snapshot_update"

SIGNATURE_HEADER = "X-Eyeson-Signature"


class WebhookModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class RoomRef(WebhookModel):
    id: str = ""


class DownloadLinks(WebhookModel):
    download: Optional[str] = None


class WebhookRoom(WebhookModel):
    id: str = ""
    name: str = ""
    started_at: Optional[datetime] = None
    shutdown: bool = False


class WebhookRecording(WebhookModel):
    """Recording reference. ``created_at`` is a unix timestamp."""

    id: str = ""
    duration: int = 0
    created_at: int = 0
    links: DownloadLinks = Field(default_factory=DownloadLinks)
    room: RoomRef = Field(default_factory=RoomRef)


class WebhookSnapshot(WebhookModel):
    id: str = ""
    name: str = ""
    created_at: Optional[datetime] = None
    links: DownloadLinks = Field(default_factory=DownloadLinks)
    room: RoomRef = Field(default_factory=RoomRef)


class Webhook(WebhookModel):
    """Webhook body. Which of room/recording/snapshot is set depends on type."""

    type: str
    room: WebhookRoom = Field(default_factory=WebhookRoom)
    recording: Optional[WebhookRecording] = None
    snapshot: Optional[WebhookSnapshot] = None


def compute_signature(api_key: str, body: bytes) -> str:
    """Hex HMAC-SHA256 of the body keyed by the API key."""
    return hmac.new(api_key.encode(), body, hashlib.sha256).hexdigest()


def verify_signature(api_key: str, body: bytes, signature: str | None) -> bool:
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(api_key, body), signature)


def parse_webhook(api_key: str, body: bytes, signature: str | None) -> Webhook:
    """
    Verify and decode a webhook request body.

    Args:
        api_key: API key the webhook was registered with
        body: Raw request body
        signature: Value of the X-Eyeson-Signature header

    Raises:
        WebhookSignatureError: If the signature does not match
        pydantic.ValidationError: If the body is not a valid webhook
    """
    if not verify_signature(api_key, body, signature):
        raise WebhookSignatureError("Webhook signature does not match")
    return Webhook.model_validate_json(body)
