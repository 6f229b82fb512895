"""
eyeson REST API client.

Usage:
    from eyeson.client.rest import AsyncRestClient
    async_client = AsyncRestClient(api_key="your-api-key")
"""

from eyeson.errors import (
    ApiError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

from .client import DEFAULT_ENDPOINT, USER_AGENT, AsyncRestClient, validate_response
from .webhooks import WebhookDetails, WebhooksApi

__all__ = [
    "AsyncRestClient",
    "DEFAULT_ENDPOINT",
    "USER_AGENT",
    "validate_response",
    "WebhookDetails",
    "WebhooksApi",
    "ApiError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
]
