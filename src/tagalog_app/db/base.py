"""
tagalog_app.db.base

SQLAlchemy declarative base and table namespace.

Responsibilities:
- Provide a shared DeclarativeBase for all ORM models.
- Own the namespace prefix applied to every physical table name.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase

# Several apps share one database; every table of this one carries the prefix.
TABLE_PREFIX = "tagalog-app-2_"


def table_name(name: str, *, prefix: str = TABLE_PREFIX) -> str:
    return f"{prefix}{name}"


class Base(DeclarativeBase):
    # Attribute names filled by `tagalog_app.db.timestamps` hooks.
    __stamp_on_insert__ = ()
    __touch_on_update__ = ()


# --- Module Notes -----------------------------------------------------------
# All ORM models should inherit from `Base` so Alembic and metadata discovery work.
