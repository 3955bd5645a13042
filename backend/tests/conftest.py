"""
Pytest configuration and fixtures for server tests.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from backend.main import app
from backend.repos.sketch_repo import MemorySketchStore, get_sketch_store


@pytest.fixture
def store():
    """A fresh in-memory store wired into the app for one test."""
    fresh = MemorySketchStore()
    app.dependency_overrides[get_sketch_store] = lambda: fresh
    yield fresh
    app.dependency_overrides.pop(get_sketch_store, None)


@pytest_asyncio.fixture
async def async_client(store):
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
