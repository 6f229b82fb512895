"""
Async REST client for the eyeson API.

Only the plumbing the realtime observer and the webhook service need:
base endpoint, authorization header, form-encoded requests and status
code validation.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from eyeson.errors import (
    ApiError,
    ConfigurationError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

from .webhooks import WebhooksApi

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.eyeson.team"
USER_AGENT = "eyeson-python"


class AsyncRestClient:
    """
    REST client bound to one API key.

    Example:
        async with AsyncRestClient(api_key="...") as client:
            details = await client.webhooks.get()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        httpx_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._http = httpx_client or httpx.AsyncClient(timeout=timeout)
        self.webhooks = WebhooksApi(self)

    async def __aenter__(self) -> AsyncRestClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def auth_headers(self) -> dict[str, str]:
        """Authorization header for this client, empty without an API key."""
        if not self.api_key:
            return {}
        return {"Authorization": self.api_key}

    def build_url(self, path: str) -> str:
        if not self.base_url:
            raise ConfigurationError("Client base_url not specified")
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send a request and validate the response status.

        POST and PUT send ``data`` form-encoded in the body; other methods
        attach it as query parameters.

        Raises:
            ConfigurationError: If the client has no base URL
            ApiError: If the API answers with an unexpected status code
        """
        method = method.upper()
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
            **self.auth_headers(),
        }
        kwargs: dict[str, Any] = {"headers": headers}
        if method in ("POST", "PUT"):
            if data is not None:
                kwargs["data"] = data
        elif data is not None:
            kwargs["params"] = data

        url = self.build_url(path)
        logger.debug(f"[REST] {method} {url}")
        response = await self._http.request(method, url, **kwargs)
        validate_response(response)
        return response


def validate_response(response: httpx.Response) -> None:
    """Map API status codes to errors. 200, 201 and 204 are successful."""
    code = response.status_code
    if code in (200, 201, 204):
        return
    body = response.text
    if code == 404:
        raise NotFoundError(
            code, "Not found! Resource does not exist or expired", body
        )
    if code == 401:
        raise UnauthorizedError(
            code, "Authorization failed! Check the API key to be valid", body
        )
    if code == 403:
        raise ForbiddenError(
            code, "Bad request! Check your request parameters to be valid", body
        )
    raise ApiError(
        code, f"Unknown error! Request failed for an unknown error ({code})", body
    )
