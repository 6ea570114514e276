"""
tagalog_app.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create or drop all tables from model metadata.
- Keep the production provisioning path separate (Alembic).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from tagalog_app.db import models  # noqa: F401  # registers tables on Base.metadata
from tagalog_app.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """Dev/test bootstrap: create every table from model metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: AsyncEngine) -> None:
    """Dev/test teardown: drop every table from model metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
