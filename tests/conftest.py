"""Shared test fixtures for the ddroller test suite.

client  (function scope)
    Builds an AsyncClient wired to the FastAPI app against a fresh in-memory
    SQLite database. Uses StaticPool so every session shares the same
    connection. Overrides get_db, and get_random_source with a FixedRandom
    that tests load via the ``draws`` fixture.

session_factory  (function scope)
    Session factory bound to the same database as client. Open a short-lived
    session with it to seed or assert DB state around HTTP requests.

For tests with no DB at all (notation, evaluator, slugs), no fixture is needed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ddroller.database import Base, get_db
from ddroller.dependencies import get_random_source
from ddroller.main import app


class FixedRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, values: Iterable[int] = ()) -> None:
        self.values = list(values)

    def randint(self, a: int, b: int) -> int:
        if not self.values:
            raise AssertionError("FixedRandom ran out of draws")
        value = self.values.pop(0)
        assert a <= value <= b, f"draw {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def draws(rng: FixedRandom) -> Callable[..., None]:
    """Queue values for the next rolls made through the app."""

    def _queue(*values: int) -> None:
        rng.values.extend(values)

    return _queue


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()



@pytest.fixture
async def client(session_factory, rng):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_random_source] = lambda: rng

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_random_source, None)


@pytest.fixture
def fixed_random() -> type[FixedRandom]:
    """The FixedRandom class, for tests that build their own sources."""
    return FixedRandom
