"""
tagalog_app.db.models

Persistence schema for the vocabulary trainer.

Responsibilities:
- Define ORM models for authentication state:
  - User: identity record (credentials optional for OAuth-only users)
  - Account: external provider linkage, keyed by (provider, providerAccountId)
  - AuthSession: login session keyed by its token
  - VerificationToken: email verification / passwordless login tokens
- Define ORM models for learning:
  - Word: vocabulary entry
  - UserProgress: per-user traversal summary (one row per user)
  - UserWordProgress: append-only swipe/answer history
- Post: standalone posts table, not tied to the learning tables.

Physical column names keep the camelCase names the web app reads; Python
attributes are snake_case.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tagalog_app.db.base import Base, table_name
from tagalog_app.db.timestamps import as_utc, install_timestamp_hooks, utcnow
from tagalog_app.db.types import EpochSeconds


def _new_user_id() -> str:
    return str(uuid.uuid4())


class AccountType(enum.StrEnum):
    # Stored as the plain string value; matches the auth adapter's account types.
    oauth = "oauth"
    oidc = "oidc"
    email = "email"
    webauthn = "webauthn"


class User(Base):
    __tablename__ = table_name("user")
    __stamp_on_insert__ = ("email_verified",)

    id: Mapped[str] = mapped_column(String(255), primary_key=True, default=_new_user_id)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    # Defaults to the insertion time; the auth layer may clear or overwrite it.
    email_verified: Mapped[datetime | None] = mapped_column(
        "emailVerified", EpochSeconds, nullable=True
    )
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Absent for users that only sign in through a provider.
    password_hash: Mapped[str | None] = mapped_column("password", String(255), nullable=True)

    # passive_deletes="all": the engine's RESTRICT decides, the ORM never nulls children.
    accounts: Mapped[list[Account]] = relationship(back_populates="user", passive_deletes="all")
    sessions: Mapped[list[AuthSession]] = relationship(
        back_populates="user", passive_deletes="all"
    )
    progress: Mapped[list[UserProgress]] = relationship(
        back_populates="user", passive_deletes="all"
    )
    word_progress: Mapped[list[UserWordProgress]] = relationship(
        back_populates="user", passive_deletes="all"
    )
    posts: Mapped[list[Post]] = relationship(back_populates="created_by", passive_deletes="all")


class Account(Base):
    __tablename__ = table_name("account")

    user_id: Mapped[str] = mapped_column(
        "userId", String(255), ForeignKey(User.id, ondelete="RESTRICT"), nullable=False
    )
    type: Mapped[AccountType] = mapped_column(
        Enum(
            AccountType,
            native_enum=False,
            length=255,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    provider: Mapped[str] = mapped_column(String(255), primary_key=True)
    provider_account_id: Mapped[str] = mapped_column(
        "providerAccountId", String(255), primary_key=True
    )
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    access_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    expires_at: Mapped[int | None] = mapped_column(Integer, nullable=True)
    token_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    scope: Mapped[str | None] = mapped_column(String(255), nullable=True)
    id_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    session_state: Mapped[str | None] = mapped_column(String(255), nullable=True)

    user: Mapped[User] = relationship(back_populates="accounts")

    __table_args__ = (Index("account_user_id_idx", "userId"),)


class AuthSession(Base):
    __tablename__ = table_name("session")

    session_token: Mapped[str] = mapped_column("sessionToken", String(255), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        "userId", String(255), ForeignKey(User.id, ondelete="RESTRICT"), nullable=False
    )
    expires: Mapped[datetime] = mapped_column(EpochSeconds, nullable=False)

    user: Mapped[User] = relationship(back_populates="sessions")

    __table_args__ = (Index("session_userId_idx", "userId"),)

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires) <= as_utc(now or utcnow())


class VerificationToken(Base):
    __tablename__ = table_name("verification_token")

    identifier: Mapped[str] = mapped_column(String(255), primary_key=True)
    token: Mapped[str] = mapped_column(String(255), primary_key=True)
    expires: Mapped[datetime] = mapped_column(EpochSeconds, nullable=False)

    def is_expired(self, now: datetime | None = None) -> bool:
        return as_utc(self.expires) <= as_utc(now or utcnow())


class Word(Base):
    __tablename__ = table_name("words_table")
    __stamp_on_insert__ = ("created_at",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Ordering / lesson grouping number; duplicates are allowed.
    no: Mapped[int] = mapped_column(Integer, nullable=False)
    tagalog: Mapped[str] = mapped_column(String(255), nullable=False)
    english: Mapped[str] = mapped_column(String(255), nullable=False)
    example: Mapped[str] = mapped_column(String(255), nullable=False)
    translation: Mapped[str] = mapped_column(String(255), nullable=False)
    chunk: Mapped[str] = mapped_column(String(255), nullable=False)
    audio1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    audio2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column("createdAt", EpochSeconds, nullable=False)

    progress_events: Mapped[list[UserWordProgress]] = relationship(
        back_populates="word", passive_deletes="all"
    )

    __table_args__ = (Index("no_idx", "no"), {"sqlite_autoincrement": True})


class UserProgress(Base):
    __tablename__ = table_name("user_progress")
    __stamp_on_insert__ = ("last_accessed", "created_at")
    __touch_on_update__ = ("updated_at",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        "userId", String(255), ForeignKey(User.id, ondelete="RESTRICT"), nullable=False
    )
    current_page: Mapped[int] = mapped_column(
        "currentPage", Integer, nullable=False, default=1, server_default=text("1")
    )
    total_pages: Mapped[int] = mapped_column(
        "totalPages", Integer, nullable=False, default=1, server_default=text("1")
    )
    words_completed: Mapped[int] = mapped_column(
        "wordsCompleted", Integer, nullable=False, default=0, server_default=text("0")
    )
    total_words: Mapped[int] = mapped_column(
        "totalWords", Integer, nullable=False, default=0, server_default=text("0")
    )
    last_accessed: Mapped[datetime] = mapped_column("lastAccessed", EpochSeconds, nullable=False)
    created_at: Mapped[datetime] = mapped_column("createdAt", EpochSeconds, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column("updatedAt", EpochSeconds, nullable=True)

    user: Mapped[User] = relationship(back_populates="progress")

    __table_args__ = (
        # Unique: one summary row per user, also under concurrent first visits.
        Index("user_progress_user_id_idx", "userId", unique=True),
        Index("user_progress_last_accessed_idx", "lastAccessed"),
        {"sqlite_autoincrement": True},
    )


class UserWordProgress(Base):
    __tablename__ = table_name("user_word_progress")
    __stamp_on_insert__ = ("created_at",)
    __touch_on_update__ = ("updated_at",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        "userId", String(255), ForeignKey(User.id, ondelete="RESTRICT"), nullable=False
    )
    word_id: Mapped[int] = mapped_column(
        "wordId", Integer, ForeignKey(Word.id, ondelete="RESTRICT"), nullable=False
    )
    # True = recalled (right swipe), False = not recalled (left swipe).
    known: Mapped[bool] = mapped_column(Boolean, nullable=False)
    lesson_number: Mapped[int] = mapped_column("lessonNumber", Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column("createdAt", EpochSeconds, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column("updatedAt", EpochSeconds, nullable=True)

    user: Mapped[User] = relationship(back_populates="word_progress")
    word: Mapped[Word] = relationship(back_populates="progress_events")

    __table_args__ = (
        Index("user_word_progress_user_id_idx", "userId"),
        Index("user_word_progress_word_id_idx", "wordId"),
        Index("user_word_progress_lesson_idx", "lessonNumber"),
        {"sqlite_autoincrement": True},
    )


class Post(Base):
    __tablename__ = table_name("post")
    __stamp_on_insert__ = ("created_at",)
    __touch_on_update__ = ("updated_at",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    created_by_id: Mapped[str] = mapped_column(
        "createdById", String(255), ForeignKey(User.id, ondelete="RESTRICT"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column("createdAt", EpochSeconds, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column("updatedAt", EpochSeconds, nullable=True)

    created_by: Mapped[User] = relationship(back_populates="posts")

    __table_args__ = (
        Index("created_by_idx", "createdById"),
        Index("name_idx", "name"),
        {"sqlite_autoincrement": True},
    )


install_timestamp_hooks(Base)


# --- Module Notes -----------------------------------------------------------
# Index names are global in SQLite; they match the names already deployed, so
# keep them stable when adding tables.
