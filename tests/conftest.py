"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build a fresh in-memory SQLite database (foreign keys on) per test.
- Provide a session factory and an open session on it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tagalog_app.db import timestamps
from tagalog_app.db.init_db import init_db
from tagalog_app.db.session import create_engine, create_sessionmaker
from tagalog_app.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", database_url="sqlite+aiosqlite://", page_size=2)


@pytest_asyncio.fixture
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(engine)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


class FrozenClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> datetime:
        self.now = datetime.fromtimestamp(self.now.timestamp() + seconds, tz=timezone.utc)
        return self.now


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FrozenClock:
    frozen = FrozenClock(datetime(2025, 3, 1, 8, 30, tzinfo=timezone.utc))
    monkeypatch.setattr(timestamps, "utcnow", frozen)
    return frozen


# --- Module Notes -----------------------------------------------------------
# The in-memory engine uses a single shared connection: open at most one
# transaction at a time per test.
