"""Client modules for platform communication."""

from eyeson.client.rest import AsyncRestClient
from eyeson.client.streaming import ActionCableClient

__all__ = ["AsyncRestClient", "ActionCableClient"]
