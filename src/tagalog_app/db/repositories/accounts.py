"""
tagalog_app.db.repositories.accounts

Repository for `Account` entities (external provider linkage).

Responsibilities:
- Link a provider identity to a user; a duplicate (provider, providerAccountId)
  surfaces as `UniqueViolation`.
- Look up and unlink accounts.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import Account, AccountType


class AccountRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def link(
        self,
        *,
        user_id: str,
        type: AccountType | str,
        provider: str,
        provider_account_id: str,
        refresh_token: str | None = None,
        access_token: str | None = None,
        expires_at: int | None = None,
        token_type: str | None = None,
        scope: str | None = None,
        id_token: str | None = None,
        session_state: str | None = None,
    ) -> Account:
        account = Account(
            user_id=user_id,
            type=AccountType(type),
            provider=provider,
            provider_account_id=provider_account_id,
            refresh_token=refresh_token,
            access_token=access_token,
            expires_at=expires_at,
            token_type=token_type,
            scope=scope,
            id_token=id_token,
            session_state=session_state,
        )
        self._session.add(account)
        with translate_integrity_errors("account"):
            await self._session.flush()
        return account

    async def get(self, provider: str, provider_account_id: str) -> Account | None:
        # Identity order follows the primary key: (provider, providerAccountId).
        return await self._session.get(Account, (provider, provider_account_id))

    async def list_for_user(self, user_id: str) -> list[Account]:
        stmt = select(Account).where(Account.user_id == user_id).order_by(Account.provider)
        return list((await self._session.execute(stmt)).scalars().all())

    async def unlink(self, provider: str, provider_account_id: str) -> bool:
        account = await self.get(provider, provider_account_id)
        if account is None:
            return False
        await self._session.delete(account)
        await self._session.flush()
        return True
