"""
tagalog_app.db.repositories.progress

Repository for `UserProgress` entities.

Responsibilities:
- Create and read the per-user progress summary.
- Apply in-place counter updates (updatedAt is refreshed by the flush hook).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import UserProgress


class UserProgressRepo:
    _UPDATABLE = frozenset(
        {"current_page", "total_pages", "words_completed", "total_words", "last_accessed"}
    )

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, user_id: str, **counters: Any) -> UserProgress:
        unknown = set(counters) - self._UPDATABLE
        if unknown:
            raise ValueError(f"unknown progress field(s): {', '.join(sorted(unknown))}")
        progress = UserProgress(user_id=user_id, **counters)
        self._session.add(progress)
        with translate_integrity_errors("user_progress"):
            await self._session.flush()
        return progress

    async def get_for_user(self, user_id: str) -> UserProgress | None:
        stmt = select(UserProgress).where(UserProgress.user_id == user_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_recent(self, limit: int = 50) -> list[UserProgress]:
        stmt = select(UserProgress).order_by(desc(UserProgress.last_accessed)).limit(limit)
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, user_id: str, **fields: Any) -> UserProgress | None:
        unknown = set(fields) - self._UPDATABLE
        if unknown:
            raise ValueError(f"unknown progress field(s): {', '.join(sorted(unknown))}")
        progress = await self.get_for_user(user_id)
        if progress is None:
            return None
        for key, value in fields.items():
            setattr(progress, key, value)
        with translate_integrity_errors("user_progress"):
            await self._session.flush()
        return progress
