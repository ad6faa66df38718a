"""API test fixtures — FastAPI test client over the fake session registry.

Invariants:
    - get_session_registry overridden so no lifespan / bridge is needed
    - Overrides cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from channel_gateway.api.dependencies import get_session_registry
from channel_gateway.main import app


@pytest.fixture
async def client(registry):
    """FastAPI test client with the registry dependency overridden."""
    app.dependency_overrides[get_session_registry] = lambda: registry

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
