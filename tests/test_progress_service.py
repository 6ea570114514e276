"""
tests.test_progress_service

Learning progress service.

Responsibilities:
- First-visit creation (including a lost creation race).
- Swipe recording keeps the summary row consistent with the attempt history.
- Page navigation and lesson summaries.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.repositories.progress import UserProgressRepo
from tagalog_app.db.repositories.users import UserRepo
from tagalog_app.db.repositories.word_progress import UserWordProgressRepo
from tagalog_app.db.repositories.words import WordRepo
from tagalog_app.schemas import WordIn
from tagalog_app.services.progress_service import ProgressService
from tagalog_app.settings import Settings


async def _seed(session: AsyncSession, n_words: int = 3) -> list[int]:
    await UserRepo(session).create(user_id="u1", email="a@example.com")
    words = await WordRepo(session).add_many(
        WordIn(
            no=i,
            tagalog=f"salita{i}",
            english=f"word{i}",
            example="...",
            translation="...",
            chunk="basics",
        )
        for i in range(1, n_words + 1)
    )
    await session.commit()
    return [w.id for w in words]


@pytest.mark.asyncio
async def test_ensure_progress_creates_row_with_totals(
    session: AsyncSession, settings: Settings
) -> None:
    await _seed(session, n_words=3)
    service = ProgressService(session=session, settings=settings)

    progress = await service.ensure_progress("u1")

    # page_size=2 in the test settings
    assert progress.total_words == 3
    assert progress.total_pages == 2
    assert progress.current_page == 1
    assert progress.words_completed == 0
    again = await service.ensure_progress("u1")
    assert again.id == progress.id


@pytest.mark.asyncio
async def test_ensure_progress_with_empty_vocabulary(
    session: AsyncSession, settings: Settings
) -> None:
    await UserRepo(session).create(user_id="u1", email="a@example.com")
    await session.commit()

    progress = await ProgressService(session=session, settings=settings).ensure_progress("u1")
    assert progress.total_words == 0
    assert progress.total_pages == 1


@pytest.mark.asyncio
async def test_ensure_progress_unknown_user(session: AsyncSession, settings: Settings) -> None:
    with pytest.raises(ValueError, match="user not found"):
        await ProgressService(session=session, settings=settings).ensure_progress("ghost")


@pytest.mark.asyncio
async def test_lost_creation_race_returns_existing_row(
    session: AsyncSession, settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    await _seed(session)
    existing = await UserProgressRepo(session).create(user_id="u1", total_words=99)
    await session.commit()
    existing_id = existing.id

    service = ProgressService(session=session, settings=settings)
    real_lookup = service._progress.get_for_user
    calls: list[str] = []

    async def stale_first_lookup(user_id: str):
        # Simulates a concurrent request inserting between our check and our insert.
        calls.append(user_id)
        if len(calls) == 1:
            return None
        return await real_lookup(user_id)

    monkeypatch.setattr(service._progress, "get_for_user", stale_first_lookup)

    progress = await service.ensure_progress("u1")

    assert progress.id == existing_id
    assert progress.total_words == 99
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_record_swipe_appends_and_updates_summary(
    session: AsyncSession, settings: Settings, clock
) -> None:
    word_ids = await _seed(session)
    service = ProgressService(session=session, settings=settings)
    progress = await service.ensure_progress("u1")
    first_seen = progress.last_accessed

    clock.advance(120)
    await service.record_swipe(user_id="u1", word_id=word_ids[0], lesson_number=1, known=True)
    await service.record_swipe(user_id="u1", word_id=word_ids[1], lesson_number=1, known=False)
    event = await service.record_swipe(
        user_id="u1", word_id=word_ids[2], lesson_number=1, known=True
    )

    assert event.id is not None
    assert event.known is True
    assert progress.words_completed == 2
    assert progress.updated_at == clock.now
    assert progress.created_at == first_seen

    # A later left swipe takes the word back out of the completed count.
    await service.record_swipe(user_id="u1", word_id=word_ids[0], lesson_number=2, known=False)
    assert progress.words_completed == 1
    history = await UserWordProgressRepo(session).list_for_word("u1", word_ids[0])
    assert [e.known for e in history] == [True, False]


@pytest.mark.asyncio
async def test_record_swipe_unknown_word(session: AsyncSession, settings: Settings) -> None:
    await _seed(session)
    service = ProgressService(session=session, settings=settings)
    with pytest.raises(ValueError, match="word not found"):
        await service.record_swipe(user_id="u1", word_id=424242, lesson_number=1, known=True)


@pytest.mark.asyncio
async def test_go_to_page_clamps(session: AsyncSession, settings: Settings) -> None:
    await _seed(session, n_words=5)
    service = ProgressService(session=session, settings=settings)

    assert (await service.go_to_page("u1", 2)).current_page == 2
    assert (await service.go_to_page("u1", 99)).current_page == 3
    assert (await service.go_to_page("u1", -4)).current_page == 1


@pytest.mark.asyncio
async def test_refresh_totals_after_vocabulary_grows(
    session: AsyncSession, settings: Settings
) -> None:
    await _seed(session, n_words=1)
    service = ProgressService(session=session, settings=settings)
    assert (await service.ensure_progress("u1")).total_pages == 1

    await WordRepo(session).add_many(
        WordIn(no=n, tagalog=f"bago{n}", english="new", example=".", translation=".", chunk="x")
        for n in range(2, 6)
    )
    await session.commit()

    progress = await service.refresh_totals("u1")
    assert progress.total_words == 5
    assert progress.total_pages == 3


@pytest.mark.asyncio
async def test_lesson_summary_and_snapshot(session: AsyncSession, settings: Settings) -> None:
    word_ids = await _seed(session)
    service = ProgressService(session=session, settings=settings)
    assert await service.snapshot("u1") is None

    await service.record_swipe(user_id="u1", word_id=word_ids[0], lesson_number=1, known=True)
    await service.record_swipe(user_id="u1", word_id=word_ids[1], lesson_number=1, known=False)
    await service.record_swipe(user_id="u1", word_id=word_ids[1], lesson_number=1, known=True)
    await service.record_swipe(user_id="u1", word_id=word_ids[2], lesson_number=2, known=False)

    summary = await service.lesson_summary("u1", 1)
    assert (summary.reviewed, summary.known, summary.unknown) == (2, 2, 0)
    empty = await service.lesson_summary("u1", 7)
    assert empty.reviewed == 0

    snap = await service.snapshot("u1")
    assert snap is not None
    assert snap.user_id == "u1"
    assert snap.words_completed == 2
    assert snap.total_words == 3
