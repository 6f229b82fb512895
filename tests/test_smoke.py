"""
Smoke tests - verify basic imports and setup work.
"""

import eyeson
from eyeson import AsyncRestClient, Observer, Subscription, decode_frame


def test_can_import_top_level():
    """Verify we can import the public API."""
    assert AsyncRestClient is not None
    assert Observer is not None
    assert Subscription is not None
    assert decode_frame is not None
    assert eyeson.__version__


def test_can_import_platform_and_client():
    from eyeson.client.streaming import ActionCableClient, CableTransport
    from eyeson.platform import EVENT_TYPES, ObserverEvent, parse_webhook

    assert ActionCableClient is not None
    assert CableTransport is not None
    assert len(EVENT_TYPES) == 9
    assert ObserverEvent is not None
    assert parse_webhook is not None


async def test_fixtures_work(observer, fake_transport, chat_frame):
    """Verify our test fixtures are properly configured."""
    assert observer is not None
    assert fake_transport.closed is False
    assert chat_frame["cid"] == "u1"
