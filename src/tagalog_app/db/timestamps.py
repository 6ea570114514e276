"""
tagalog_app.db.timestamps

Creation/update timestamp rules.

Responsibilities:
- `stamp_on_insert`: fill unset insertion timestamps with the current time.
- `touch_on_update`: refresh update timestamps whenever a row mutates.
- Wire both into ORM flushes through mapper events.

Models opt in by listing attribute names:

    __stamp_on_insert__ = ("created_at",)
    __touch_on_update__ = ("updated_at",)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import event, inspect
from sqlalchemy.orm import Mapper


def utcnow() -> datetime:
    # Storage is whole epoch seconds; keep in-memory values identical to what reloads.
    return datetime.now(timezone.utc).replace(microsecond=0)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def stamp_on_insert(target: Any, now: datetime | None = None) -> None:
    now = now or utcnow()
    for attr in getattr(target, "__stamp_on_insert__", ()):
        if getattr(target, attr) is None:
            setattr(target, attr, now)


def touch_on_update(target: Any, now: datetime | None = None) -> None:
    now = now or utcnow()
    for attr in getattr(target, "__touch_on_update__", ()):
        setattr(target, attr, now)


def _changed_columns(mapper: Mapper[Any], target: Any) -> set[str]:
    state = inspect(target)
    return {
        prop.key for prop in mapper.column_attrs if state.attrs[prop.key].history.has_changes()
    }


def _before_insert(mapper: Mapper[Any], connection: Any, target: Any) -> None:
    stamp_on_insert(target)


def _before_update(mapper: Mapper[Any], connection: Any, target: Any) -> None:
    touched = set(getattr(target, "__touch_on_update__", ()))
    if not touched:
        return
    changed = _changed_columns(mapper, target)
    # before_update also fires for dirty objects without net column changes.
    if not changed or changed & touched:
        return
    touch_on_update(target)


_installed: set[type] = set()


def install_timestamp_hooks(base: type) -> None:
    if base in _installed:
        return
    _installed.add(base)
    event.listen(base, "before_insert", _before_insert, propagate=True)
    event.listen(base, "before_update", _before_update, propagate=True)


# --- Module Notes -----------------------------------------------------------
# Rows written with Core `insert()`/`update()` bypass these hooks; repositories
# go through the ORM unit of work for that reason.
