"""
tagalog_app.db.repositories.verification_tokens

Repository for `VerificationToken` entities.

Responsibilities:
- Issue tokens keyed by (identifier, token).
- Consume a token exactly once (delete-and-return).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import VerificationToken
from tagalog_app.db.timestamps import as_utc, utcnow


class VerificationTokenRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, identifier: str, token: str, expires: datetime) -> VerificationToken:
        vt = VerificationToken(identifier=identifier, token=token, expires=as_utc(expires))
        self._session.add(vt)
        with translate_integrity_errors("verification_token"):
            await self._session.flush()
        return vt

    async def use(self, identifier: str, token: str) -> VerificationToken | None:
        """
        Delete the token and return it. Expired tokens are returned as well;
        checking `is_expired()` is the caller's decision.
        """

        vt = await self._session.get(VerificationToken, (identifier, token))
        if vt is None:
            return None
        await self._session.delete(vt)
        await self._session.flush()
        return vt

    async def purge_expired(self, now: datetime | None = None) -> int:
        cutoff = as_utc(now or utcnow())
        result = await self._session.execute(
            delete(VerificationToken)
            .where(VerificationToken.expires <= cutoff)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0
