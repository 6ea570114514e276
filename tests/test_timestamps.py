"""
tests.test_timestamps

Creation/update timestamp rules.

Responsibilities:
- The explicit functions on transient objects.
- The flush hooks: stamped on insert, updatedAt refreshed on every mutation,
  createdAt untouched.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db import timestamps
from tagalog_app.db.models import User, UserProgress, Word
from tagalog_app.db.repositories.progress import UserProgressRepo
from tagalog_app.db.repositories.users import UserRepo
from tagalog_app.db.repositories.word_progress import UserWordProgressRepo
from tagalog_app.db.repositories.words import WordRepo

T0 = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def test_utcnow_is_aware_and_whole_seconds() -> None:
    now = timestamps.utcnow()
    assert now.tzinfo is not None
    assert now.microsecond == 0


def test_stamp_on_insert_fills_only_unset_attributes() -> None:
    progress = UserProgress(user_id="u1")
    explicit = T0 - timedelta(days=3)
    progress.last_accessed = explicit

    timestamps.stamp_on_insert(progress, now=T0)

    assert progress.created_at == T0
    assert progress.last_accessed == explicit
    assert progress.updated_at is None


def test_touch_on_update_sets_update_columns_only() -> None:
    progress = UserProgress(user_id="u1", created_at=T0)
    later = T0 + timedelta(minutes=5)

    timestamps.touch_on_update(progress, now=later)

    assert progress.updated_at == later
    assert progress.created_at == T0


def test_models_without_update_column_are_left_alone() -> None:
    word = Word(no=1, tagalog="aso", english="dog", example="", translation="", chunk="a")
    timestamps.touch_on_update(word, now=T0)
    assert word.created_at is None


def test_as_utc_normalizes() -> None:
    naive = datetime(2025, 1, 1, 9, 0)
    plus_two = datetime(2025, 1, 1, 11, 0, tzinfo=timezone(timedelta(hours=2)))
    assert timestamps.as_utc(naive) == T0
    assert timestamps.as_utc(plus_two).utcoffset() == timedelta(0)
    assert timestamps.as_utc(plus_two) == T0


@pytest.mark.asyncio
async def test_insert_stamps_created_and_last_accessed(session: AsyncSession, clock) -> None:
    await UserRepo(session).create(user_id="u1", email="a@example.com")
    progress = await UserProgressRepo(session).create(user_id="u1")
    word = await WordRepo(session).add(
        no=1, tagalog="aso", english="dog", example="...", translation="...", chunk="animals"
    )
    await session.commit()

    assert progress.created_at == clock.now
    assert progress.last_accessed == clock.now
    assert progress.updated_at is None
    assert word.created_at == clock.now


@pytest.mark.asyncio
async def test_update_refreshes_updated_at_and_keeps_created_at(
    session: AsyncSession, clock
) -> None:
    await UserRepo(session).create(user_id="u1", email="a@example.com")
    repo = UserProgressRepo(session)
    await repo.create(user_id="u1")
    await session.commit()
    created = clock.now

    clock.advance(30)
    first = await repo.update("u1", words_completed=3)
    await session.commit()
    assert first is not None
    first_update = first.updated_at
    assert first_update == clock.now
    assert first.created_at == created

    clock.advance(30)
    second = await repo.update("u1", words_completed=4)
    await session.commit()
    assert second is not None
    assert second.updated_at > first_update
    assert second.created_at == created

    session.expunge_all()
    stored = await repo.get_for_user("u1")
    assert stored is not None
    assert stored.words_completed == 4
    assert stored.created_at == created
    assert stored.updated_at == clock.now


@pytest.mark.asyncio
async def test_explicit_updated_at_wins(session: AsyncSession, clock) -> None:
    await UserRepo(session).create(user_id="u1", email="a@example.com")
    repo = UserProgressRepo(session)
    progress = await repo.create(user_id="u1")
    await session.commit()

    clock.advance(60)
    pinned = T0
    progress.updated_at = pinned
    progress.total_words = 10
    await session.commit()

    assert progress.updated_at == pinned


@pytest.mark.asyncio
async def test_correcting_an_attempt_touches_only_that_row(session: AsyncSession, clock) -> None:
    await UserRepo(session).create(user_id="u1", email="a@example.com")
    word = await WordRepo(session).add(
        no=1, tagalog="aso", english="dog", example="...", translation="...", chunk="animals"
    )
    events = UserWordProgressRepo(session)
    first = await events.record(user_id="u1", word_id=word.id, known=False, lesson_number=1)
    second = await events.record(user_id="u1", word_id=word.id, known=False, lesson_number=1)
    await session.commit()

    clock.advance(10)
    corrected = await events.set_known(first.id, True)
    await session.commit()

    assert corrected is not None
    assert corrected.known is True
    assert corrected.updated_at == clock.now
    assert second.updated_at is None


@pytest.mark.asyncio
async def test_user_email_verified_defaults_to_insert_time(session: AsyncSession, clock) -> None:
    users = UserRepo(session)
    stamped = await users.create(user_id="u1", email="a@example.com")
    explicit = await users.create(user_id="u2", email="b@example.com", email_verified=T0)
    await session.commit()

    assert stamped.email_verified == clock.now
    assert explicit.email_verified == T0

    raw = await session.execute(
        text(f'SELECT "emailVerified" FROM "{User.__tablename__}" WHERE id = :id'),
        {"id": "u1"},
    )
    assert raw.scalar_one() == int(clock.now.timestamp())
