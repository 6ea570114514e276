"""
tagalog_app.services.auth_store

Persistence operations behind the web app's authentication adapter.

Responsibilities:
- Users, provider accounts, sessions and verification tokens, one committed
  transaction per operation.
- Roll back and re-raise constraint violations (duplicate provider identity,
  duplicate session token, missing user); nothing is silently ignored.

Provider handshakes and password hashing happen before these calls.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import ConstraintViolation
from tagalog_app.db.models import Account, AuthSession, User, VerificationToken
from tagalog_app.db.repositories.accounts import AccountRepo
from tagalog_app.db.repositories.sessions import SessionRepo
from tagalog_app.db.repositories.users import UserRepo
from tagalog_app.db.repositories.verification_tokens import VerificationTokenRepo
from tagalog_app.observability.logging import get_logger

log = get_logger(__name__)


class AuthStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

        self._users = UserRepo(session)
        self._accounts = AccountRepo(session)
        self._sessions = SessionRepo(session)
        self._tokens = VerificationTokenRepo(session)

    @asynccontextmanager
    async def _transaction(self, action: str) -> AsyncIterator[None]:
        try:
            yield
            await self._session.commit()
        except ConstraintViolation as exc:
            await self._session.rollback()
            log.warning(
                "constraint_violation",
                action=action,
                entity=exc.entity,
                violation=type(exc).__name__,
            )
            raise

    # Users

    async def create_user(self, *, email: str, **fields: Any) -> User:
        async with self._transaction("create_user"):
            user = await self._users.create(email=email, **fields)
        log.info("user_created", user_id=user.id)
        return user

    async def get_user(self, user_id: str) -> User | None:
        return await self._users.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._users.get_by_email(email)

    async def get_user_by_account(self, provider: str, provider_account_id: str) -> User | None:
        return await self._users.get_by_account(provider, provider_account_id)

    async def update_user(self, user_id: str, **fields: Any) -> User | None:
        async with self._transaction("update_user"):
            user = await self._users.update(user_id, **fields)
        return user

    async def delete_user(self, user_id: str) -> bool:
        async with self._transaction("delete_user"):
            deleted = await self._users.delete(user_id)
        if deleted:
            log.info("user_deleted", user_id=user_id)
        return deleted

    # Accounts

    async def link_account(self, **fields: Any) -> Account:
        async with self._transaction("link_account"):
            account = await self._accounts.link(**fields)
        log.info("account_linked", user_id=account.user_id, provider=account.provider)
        return account

    async def unlink_account(self, provider: str, provider_account_id: str) -> bool:
        async with self._transaction("unlink_account"):
            removed = await self._accounts.unlink(provider, provider_account_id)
        if removed:
            log.info("account_unlinked", provider=provider)
        return removed

    # Sessions

    async def create_session(
        self, *, session_token: str, user_id: str, expires: datetime
    ) -> AuthSession:
        async with self._transaction("create_session"):
            auth_session = await self._sessions.create(
                session_token=session_token, user_id=user_id, expires=expires
            )
        log.info("session_created", user_id=user_id)
        return auth_session

    async def get_session_and_user(self, session_token: str) -> tuple[AuthSession, User] | None:
        return await self._sessions.get_with_user(session_token)

    async def update_session(self, session_token: str, expires: datetime) -> AuthSession | None:
        async with self._transaction("update_session"):
            auth_session = await self._sessions.update_expiry(session_token, expires)
        return auth_session

    async def delete_session(self, session_token: str) -> bool:
        async with self._transaction("delete_session"):
            deleted = await self._sessions.delete(session_token)
        return deleted

    # Verification tokens

    async def create_verification_token(
        self, *, identifier: str, token: str, expires: datetime
    ) -> VerificationToken:
        async with self._transaction("create_verification_token"):
            vt = await self._tokens.create(identifier=identifier, token=token, expires=expires)
        return vt

    async def use_verification_token(self, identifier: str, token: str) -> VerificationToken | None:
        async with self._transaction("use_verification_token"):
            vt = await self._tokens.use(identifier, token)
        return vt
