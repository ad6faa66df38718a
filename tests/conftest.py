"""Root conftest — shared test configuration and fake session registry.

Invariants:
    - Tests never talk to a real bridge: SESSION_IDS empty, bridge URL unroutable
    - Session "s1" resolves to a FakeClient that knows one channel, "123@newsletter"
"""

import os

import pytest

os.environ.setdefault("BRIDGE_URL", "http://bridge.invalid")
os.environ.setdefault("SESSION_IDS", "")
os.environ.setdefault("LOG_FORMAT", "text")

from channel_gateway.infrastructure.session_registry import (  # noqa: E402
    InMemorySessionRegistry,
)
from tests.fake_handles import FakeChannel, FakeClient  # noqa: E402


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def fake_client(channel):
    return FakeClient({channel.id: channel})


@pytest.fixture
def registry(fake_client):
    return InMemorySessionRegistry({"s1": fake_client})
