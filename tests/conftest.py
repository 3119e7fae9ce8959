"""Shared test fixtures for the diceplot test suite.

Engine and parser tests need no fixtures. HTTP tests use ``async_client``,
an AsyncClient wired straight to the FastAPI app.
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from diceplot.distribution import _cached_pmf
from diceplot.main import app


@pytest.fixture(autouse=True)
def clear_pmf_cache():
    """Start every test with an empty PMF memo so cached results never mask a bug."""
    _cached_pmf.cache_clear()
    yield
    _cached_pmf.cache_clear()


@pytest_asyncio.fixture
async def async_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
