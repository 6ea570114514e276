"""initial schema: auth tables, vocabulary, learning progress

Revision ID: 4f1c2a9d7b30
Revises:
Create Date: 2025-06-02 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Frozen copy of the namespace at the time of this revision.
PREFIX = "tagalog-app-2_"

USER = f"{PREFIX}user"
ACCOUNT = f"{PREFIX}account"
SESSION = f"{PREFIX}session"
VERIFICATION_TOKEN = f"{PREFIX}verification_token"
WORDS = f"{PREFIX}words_table"
USER_PROGRESS = f"{PREFIX}user_progress"
USER_WORD_PROGRESS = f"{PREFIX}user_word_progress"
POST = f"{PREFIX}post"


def _user_fk() -> sa.ForeignKey:
    return sa.ForeignKey(f"{USER}.id", ondelete="RESTRICT")


def upgrade() -> None:
    op.create_table(
        USER,
        sa.Column("id", sa.String(length=255), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("emailVerified", sa.Integer(), nullable=True),
        sa.Column("image", sa.String(length=255), nullable=True),
        sa.Column("password", sa.String(length=255), nullable=True),
    )

    op.create_table(
        ACCOUNT,
        sa.Column("userId", sa.String(length=255), _user_fk(), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False),
        sa.Column("provider", sa.String(length=255), nullable=False),
        sa.Column("providerAccountId", sa.String(length=255), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.Integer(), nullable=True),
        sa.Column("token_type", sa.String(length=255), nullable=True),
        sa.Column("scope", sa.String(length=255), nullable=True),
        sa.Column("id_token", sa.Text(), nullable=True),
        sa.Column("session_state", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("provider", "providerAccountId"),
    )
    op.create_index("account_user_id_idx", ACCOUNT, ["userId"])

    op.create_table(
        SESSION,
        sa.Column("sessionToken", sa.String(length=255), primary_key=True),
        sa.Column("userId", sa.String(length=255), _user_fk(), nullable=False),
        sa.Column("expires", sa.Integer(), nullable=False),
    )
    op.create_index("session_userId_idx", SESSION, ["userId"])

    op.create_table(
        VERIFICATION_TOKEN,
        sa.Column("identifier", sa.String(length=255), nullable=False),
        sa.Column("token", sa.String(length=255), nullable=False),
        sa.Column("expires", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("identifier", "token"),
    )

    op.create_table(
        WORDS,
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("no", sa.Integer(), nullable=False),
        sa.Column("tagalog", sa.String(length=255), nullable=False),
        sa.Column("english", sa.String(length=255), nullable=False),
        sa.Column("example", sa.String(length=255), nullable=False),
        sa.Column("translation", sa.String(length=255), nullable=False),
        sa.Column("chunk", sa.String(length=255), nullable=False),
        sa.Column("audio1", sa.String(length=255), nullable=True),
        sa.Column("audio2", sa.String(length=255), nullable=True),
        sa.Column("createdAt", sa.Integer(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("no_idx", WORDS, ["no"])

    op.create_table(
        USER_PROGRESS,
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("userId", sa.String(length=255), _user_fk(), nullable=False),
        sa.Column("currentPage", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("totalPages", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("wordsCompleted", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("totalWords", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("lastAccessed", sa.Integer(), nullable=False),
        sa.Column("createdAt", sa.Integer(), nullable=False),
        sa.Column("updatedAt", sa.Integer(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("user_progress_user_id_idx", USER_PROGRESS, ["userId"], unique=True)
    op.create_index("user_progress_last_accessed_idx", USER_PROGRESS, ["lastAccessed"])

    op.create_table(
        USER_WORD_PROGRESS,
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("userId", sa.String(length=255), _user_fk(), nullable=False),
        sa.Column(
            "wordId",
            sa.Integer(),
            sa.ForeignKey(f"{WORDS}.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("known", sa.Boolean(), nullable=False),
        sa.Column("lessonNumber", sa.Integer(), nullable=False),
        sa.Column("createdAt", sa.Integer(), nullable=False),
        sa.Column("updatedAt", sa.Integer(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("user_word_progress_user_id_idx", USER_WORD_PROGRESS, ["userId"])
    op.create_index("user_word_progress_word_id_idx", USER_WORD_PROGRESS, ["wordId"])
    op.create_index("user_word_progress_lesson_idx", USER_WORD_PROGRESS, ["lessonNumber"])

    op.create_table(
        POST,
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("createdById", sa.String(length=255), _user_fk(), nullable=False),
        sa.Column("createdAt", sa.Integer(), nullable=False),
        sa.Column("updatedAt", sa.Integer(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("created_by_idx", POST, ["createdById"])
    op.create_index("name_idx", POST, ["name"])


def downgrade() -> None:
    op.drop_index("name_idx", table_name=POST)
    op.drop_index("created_by_idx", table_name=POST)
    op.drop_table(POST)

    op.drop_index("user_word_progress_lesson_idx", table_name=USER_WORD_PROGRESS)
    op.drop_index("user_word_progress_word_id_idx", table_name=USER_WORD_PROGRESS)
    op.drop_index("user_word_progress_user_id_idx", table_name=USER_WORD_PROGRESS)
    op.drop_table(USER_WORD_PROGRESS)

    op.drop_index("user_progress_last_accessed_idx", table_name=USER_PROGRESS)
    op.drop_index("user_progress_user_id_idx", table_name=USER_PROGRESS)
    op.drop_table(USER_PROGRESS)

    op.drop_index("no_idx", table_name=WORDS)
    op.drop_table(WORDS)

    op.drop_table(VERIFICATION_TOKEN)

    op.drop_index("session_userId_idx", table_name=SESSION)
    op.drop_table(SESSION)

    op.drop_index("account_user_id_idx", table_name=ACCOUNT)
    op.drop_table(ACCOUNT)

    op.drop_table(USER)
