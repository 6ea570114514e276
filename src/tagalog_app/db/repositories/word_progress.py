"""
tagalog_app.db.repositories.word_progress

Repository for `UserWordProgress` entities.

Responsibilities:
- Append swipe/answer events (one row per attempt; history is never collapsed).
- Query attempts by lesson or word, and reduce history to the latest outcome per word.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import UserWordProgress


class UserWordProgressRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(
        self, *, user_id: str, word_id: int, known: bool, lesson_number: int
    ) -> UserWordProgress:
        event = UserWordProgress(
            user_id=user_id, word_id=word_id, known=known, lesson_number=lesson_number
        )
        self._session.add(event)
        with translate_integrity_errors("user_word_progress"):
            await self._session.flush()
        return event

    async def list_for_lesson(
        self, lesson_number: int, *, user_id: str | None = None
    ) -> list[UserWordProgress]:
        stmt = select(UserWordProgress).where(UserWordProgress.lesson_number == lesson_number)
        if user_id is not None:
            stmt = stmt.where(UserWordProgress.user_id == user_id)
        stmt = stmt.order_by(UserWordProgress.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_for_word(self, user_id: str, word_id: int) -> list[UserWordProgress]:
        stmt = (
            select(UserWordProgress)
            .where(UserWordProgress.user_id == user_id, UserWordProgress.word_id == word_id)
            .order_by(UserWordProgress.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def latest_outcomes(
        self, user_id: str, *, lesson_number: int | None = None
    ) -> dict[int, bool]:
        # Ids are monotonically increasing, so max(id) per word is the latest attempt.
        latest = (
            select(func.max(UserWordProgress.id))
            .where(UserWordProgress.user_id == user_id)
            .group_by(UserWordProgress.word_id)
        )
        if lesson_number is not None:
            latest = latest.where(UserWordProgress.lesson_number == lesson_number)
        stmt = select(UserWordProgress.word_id, UserWordProgress.known).where(
            UserWordProgress.id.in_(latest)
        )
        rows = (await self._session.execute(stmt)).all()
        return {word_id: bool(known) for word_id, known in rows}

    async def set_known(self, event_id: int, known: bool) -> UserWordProgress | None:
        event = await self._session.get(UserWordProgress, event_id)
        if event is None:
            return None
        event.known = known
        await self._session.flush()
        return event


# --- Module Notes -----------------------------------------------------------
# `set_known` exists for corrections (e.g. an accidental swipe); normal reviews
# always append through `record`.
