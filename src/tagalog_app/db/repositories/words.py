"""
tagalog_app.db.repositories.words

Repository for `Word` entities (vocabulary).

Responsibilities:
- Insert single entries or validated batches.
- Page through the vocabulary in `no` order and group it by chunk.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import Word
from tagalog_app.schemas import WordIn


class WordRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        no: int,
        tagalog: str,
        english: str,
        example: str,
        translation: str,
        chunk: str,
        audio1: str | None = None,
        audio2: str | None = None,
    ) -> Word:
        word = Word(
            no=no,
            tagalog=tagalog,
            english=english,
            example=example,
            translation=translation,
            chunk=chunk,
            audio1=audio1,
            audio2=audio2,
        )
        self._session.add(word)
        with translate_integrity_errors("word"):
            await self._session.flush()
        return word

    async def add_many(self, words: Iterable[WordIn]) -> list[Word]:
        rows = [Word(**w.model_dump()) for w in words]
        self._session.add_all(rows)
        with translate_integrity_errors("word"):
            await self._session.flush()
        return rows

    async def get(self, word_id: int) -> Word | None:
        return await self._session.get(Word, word_id)

    async def count(self) -> int:
        return (await self._session.execute(select(func.count(Word.id)))).scalar_one()

    async def list_page(self, page: int, page_size: int) -> list[Word]:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be >= 1")
        stmt = (
            select(Word)
            .order_by(Word.no, Word.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_no_range(self, start: int, end: int) -> list[Word]:
        stmt = select(Word).where(Word.no.between(start, end)).order_by(Word.no, Word.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_chunk(self, chunk: str) -> list[Word]:
        stmt = select(Word).where(Word.chunk == chunk).order_by(Word.no, Word.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def chunks(self) -> list[str]:
        # Chunks in the order they first appear in the vocabulary.
        stmt = select(Word.chunk).group_by(Word.chunk).order_by(func.min(Word.no), Word.chunk)
        return list((await self._session.execute(stmt)).scalars().all())
