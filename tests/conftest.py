"""Shared pytest fixtures.

No test in this suite needs a running PostgreSQL instance: the shared engine
is replaced through the ``get_engine`` dependency with a mock whose probe
either succeeds, fails, or stalls for a known time.

Fixtures
--------
* ``make_engine``   : factory for mock ``AsyncEngine`` handles.
* ``healthy_engine`` / ``failing_engine``: ready-made mock engines.
* ``make_client``  : factory: httpx client over the app with a given engine.
* ``async_client`` : client wired to ``healthy_engine``.
"""

import asyncio
import os
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# ---------------------------------------------------------------------------
# Environment bootstrap, must run before any ``src.*`` import
# ---------------------------------------------------------------------------

os.environ.pop("DATABASE_URL", None)
os.environ.pop("PORT", None)


def mock_engine(execute_side_effect: Any = None) -> MagicMock:
    """Return a mock engine whose ``connect()`` yields a connection mock.

    *execute_side_effect* is forwarded to ``conn.execute``: an exception to
    simulate an unreachable database, or a coroutine function to add latency.
    """
    conn = AsyncMock()
    conn.execute.side_effect = execute_side_effect
    engine = MagicMock()
    engine.connect.return_value.__aenter__ = AsyncMock(return_value=conn)
    engine.connect.return_value.__aexit__ = AsyncMock(return_value=False)
    engine.dispose = AsyncMock()
    return engine


def slow_probe(seconds: float) -> Callable[..., Any]:
    async def _execute(*args: Any, **kwargs: Any) -> None:
        await asyncio.sleep(seconds)

    return _execute


@pytest.fixture
def make_engine() -> Callable[..., MagicMock]:
    return mock_engine


@pytest.fixture
def healthy_engine() -> MagicMock:
    return mock_engine()


@pytest.fixture
def failing_engine() -> MagicMock:
    return mock_engine(OSError("connection refused"))


@pytest.fixture
def slow_engine() -> MagicMock:
    """Healthy engine whose probe takes at least 50 ms."""
    return mock_engine(slow_probe(0.05))


@pytest.fixture
def make_client() -> Callable[[Any], Any]:
    """Factory returning an async context manager around an httpx client.

    The ASGI lifespan is not run by ``ASGITransport``, so the startup probe
    never touches the real engine.
    """
    from src.database import get_engine
    from src.main import app

    @asynccontextmanager
    async def _client(engine: Any) -> AsyncGenerator[AsyncClient]:
        app.dependency_overrides[get_engine] = lambda: engine
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return _client


@pytest.fixture
async def async_client(
    make_client: Callable[[Any], Any], healthy_engine: MagicMock
) -> AsyncGenerator[AsyncClient]:
    async with make_client(healthy_engine) as client:
        yield client
