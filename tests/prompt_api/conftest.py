"""
Pytest configuration and fixtures for API tests.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from prompt_api.dependencies import get_engine, get_store
from prompt_api.main import app


@pytest_asyncio.fixture
async def client(engine, store) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client bound to a fresh engine and an empty store."""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
