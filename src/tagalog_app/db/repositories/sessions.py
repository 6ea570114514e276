"""
tagalog_app.db.repositories.sessions

Repository for `AuthSession` entities.

Responsibilities:
- Create, read, extend and delete login sessions by token.
- Purge sessions past their expiry (the auth layer decides when to call it).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import AuthSession, User
from tagalog_app.db.timestamps import as_utc, utcnow


class SessionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, session_token: str, user_id: str, expires: datetime) -> AuthSession:
        auth_session = AuthSession(
            session_token=session_token, user_id=user_id, expires=as_utc(expires)
        )
        self._session.add(auth_session)
        with translate_integrity_errors("session"):
            await self._session.flush()
        return auth_session

    async def get(self, session_token: str) -> AuthSession | None:
        return await self._session.get(AuthSession, session_token)

    async def get_with_user(self, session_token: str) -> tuple[AuthSession, User] | None:
        stmt = (
            select(AuthSession, User)
            .join(User, AuthSession.user_id == User.id)
            .where(AuthSession.session_token == session_token)
        )
        row = (await self._session.execute(stmt)).one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def update_expiry(self, session_token: str, expires: datetime) -> AuthSession | None:
        auth_session = await self.get(session_token)
        if auth_session is None:
            return None
        auth_session.expires = as_utc(expires)
        await self._session.flush()
        return auth_session

    async def delete(self, session_token: str) -> bool:
        auth_session = await self.get(session_token)
        if auth_session is None:
            return False
        await self._session.delete(auth_session)
        await self._session.flush()
        return True

    async def delete_for_user(self, user_id: str) -> int:
        result = await self._session.execute(
            delete(AuthSession)
            .where(AuthSession.user_id == user_id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    async def purge_expired(self, now: datetime | None = None) -> int:
        cutoff = as_utc(now or utcnow())
        result = await self._session.execute(
            delete(AuthSession)
            .where(AuthSession.expires <= cutoff)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0
