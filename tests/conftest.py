#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for j2m tests.
The HTTP client talks to the ASGI app in-process; no server is started.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from j2m.core.config import get_settings
from j2m.main import create_app


# -----------------------------------------------------------------------------

@pytest.fixture
def fresh_settings():
    """Clear the cached Settings before and after a test that changes the env."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def client():
    """HTTP test client wired to a fresh application instance."""
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

async def convert_via_api(client: AsyncClient, content: str) -> str:
    resp = await client.post("/api/v1/convert", json={"content": content})
    assert resp.status_code == 200, resp.text
    return resp.json()["markdown"]


# -----------------------------------------------------------------------------
