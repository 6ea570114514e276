"""
tagalog_app.services.progress_service

Learning progress service (transaction owner).

Responsibilities:
- Create the single per-user progress row on first visit, tolerating
  concurrent first visits.
- Record swipes as append-only attempts and keep the summary row in sync.
- Move the user between vocabulary pages.
"""

from __future__ import annotations

import math

from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import ConstraintViolation, UniqueViolation
from tagalog_app.db.models import UserProgress, UserWordProgress
from tagalog_app.db.repositories.progress import UserProgressRepo
from tagalog_app.db.repositories.users import UserRepo
from tagalog_app.db.repositories.word_progress import UserWordProgressRepo
from tagalog_app.db.repositories.words import WordRepo
from tagalog_app.db.timestamps import utcnow
from tagalog_app.observability.logging import get_logger
from tagalog_app.schemas import LessonSummary, ProgressSnapshot
from tagalog_app.settings import Settings

log = get_logger(__name__)


class ProgressService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings

        self._users = UserRepo(session)
        self._words = WordRepo(session)
        self._progress = UserProgressRepo(session)
        self._word_progress = UserWordProgressRepo(session)

    def _pages_for(self, total_words: int) -> int:
        return max(1, math.ceil(total_words / self._settings.page_size))

    async def ensure_progress(self, user_id: str) -> UserProgress:
        existing = await self._progress.get_for_user(user_id)
        if existing is not None:
            return existing
        if await self._users.get(user_id) is None:
            raise ValueError("user not found")

        total_words = await self._words.count()
        try:
            progress = await self._progress.create(
                user_id=user_id,
                total_words=total_words,
                total_pages=self._pages_for(total_words),
            )
            await self._session.commit()
        except UniqueViolation:
            # Another request created the row first; theirs is the row.
            await self._session.rollback()
            log.info("progress_create_race_lost", user_id=user_id)
            progress = await self._progress.get_for_user(user_id)
            if progress is None:
                raise
            return progress

        log.info("progress_created", user_id=user_id, total_words=total_words)
        return progress

    async def refresh_totals(self, user_id: str) -> UserProgress:
        progress = await self.ensure_progress(user_id)
        total_words = await self._words.count()
        progress.total_words = total_words
        progress.total_pages = self._pages_for(total_words)
        progress.current_page = min(progress.current_page, progress.total_pages)
        await self._session.commit()
        return progress

    async def record_swipe(
        self, *, user_id: str, word_id: int, lesson_number: int, known: bool
    ) -> UserWordProgress:
        progress = await self.ensure_progress(user_id)
        if await self._words.get(word_id) is None:
            raise ValueError("word not found")

        try:
            event = await self._word_progress.record(
                user_id=user_id, word_id=word_id, known=known, lesson_number=lesson_number
            )
            outcomes = await self._word_progress.latest_outcomes(user_id)
            progress.words_completed = sum(1 for k in outcomes.values() if k)
            progress.last_accessed = utcnow()
            await self._session.commit()
        except ConstraintViolation:
            await self._session.rollback()
            raise

        log.info(
            "swipe_recorded",
            user_id=user_id,
            word_id=word_id,
            lesson_number=lesson_number,
            known=known,
            words_completed=progress.words_completed,
        )
        return event

    async def go_to_page(self, user_id: str, page: int) -> UserProgress:
        progress = await self.ensure_progress(user_id)
        progress.current_page = min(max(page, 1), progress.total_pages)
        progress.last_accessed = utcnow()
        await self._session.commit()
        log.info("page_changed", user_id=user_id, page=progress.current_page)
        return progress

    async def lesson_summary(self, user_id: str, lesson_number: int) -> LessonSummary:
        outcomes = await self._word_progress.latest_outcomes(user_id, lesson_number=lesson_number)
        known = sum(1 for k in outcomes.values() if k)
        return LessonSummary(
            lesson_number=lesson_number,
            reviewed=len(outcomes),
            known=known,
            unknown=len(outcomes) - known,
        )

    async def snapshot(self, user_id: str) -> ProgressSnapshot | None:
        progress = await self._progress.get_for_user(user_id)
        if progress is None:
            return None
        return ProgressSnapshot.model_validate(progress)


# --- Module Notes -----------------------------------------------------------
# `wordsCompleted` counts distinct words whose most recent attempt was "known";
# a later left swipe on the same word takes it back out.
