"""
tagalog_app.db.repositories.users

Repository for `User` entities.

Responsibilities:
- Create, look up (by id, email, or linked provider account), update and delete users.
- Keep `User.id` immutable once assigned.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tagalog_app.db.errors import translate_integrity_errors
from tagalog_app.db.models import Account, User


class UserRepo:
    _UPDATABLE = frozenset({"name", "email", "image", "email_verified", "password_hash"})

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        email: str,
        name: str | None = None,
        image: str | None = None,
        password_hash: str | None = None,
        email_verified: datetime | None = None,
        user_id: str | None = None,
    ) -> User:
        user = User(
            email=email,
            name=name,
            image=image,
            password_hash=password_hash,
            email_verified=email_verified,
        )
        if user_id is not None:
            user.id = user_id
        self._session.add(user)
        with translate_integrity_errors("user"):
            await self._session.flush()
        return user

    async def get(self, user_id: str) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        # Email is not unique in storage; pick one deterministically.
        stmt = select(User).where(User.email == email).order_by(User.id).limit(1)
        return (await self._session.execute(stmt)).scalars().first()

    async def get_by_account(self, provider: str, provider_account_id: str) -> User | None:
        stmt = (
            select(User)
            .join(Account, Account.user_id == User.id)
            .where(Account.provider == provider, Account.provider_account_id == provider_account_id)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def update(self, user_id: str, **fields: Any) -> User | None:
        unknown = set(fields) - self._UPDATABLE
        if unknown:
            raise ValueError(f"cannot update user field(s): {', '.join(sorted(unknown))}")
        user = await self._session.get(User, user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        with translate_integrity_errors("user"):
            await self._session.flush()
        return user

    async def delete(self, user_id: str) -> bool:
        user = await self._session.get(User, user_id)
        if user is None:
            return False
        await self._session.delete(user)
        # Dependent accounts/sessions/progress make this a ForeignKeyViolation.
        with translate_integrity_errors("user"):
            await self._session.flush()
        return True
