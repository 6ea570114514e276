"""
tagalog_app.db.errors

Constraint violation taxonomy for the data-access layer.

Responsibilities:
- Classify engine `IntegrityError`s into unique / foreign-key / not-null
  violations so callers can branch without parsing driver messages.
- Keep the engine error attached as `__cause__`; nothing is retried or ignored.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError


class ConstraintViolation(Exception):
    def __init__(self, message: str, *, entity: str | None = None) -> None:
        super().__init__(message)
        self.entity = entity


class UniqueViolation(ConstraintViolation):
    pass


class ForeignKeyViolation(ConstraintViolation):
    pass


class NotNullViolation(ConstraintViolation):
    pass


# Lower-cased fragments of SQLite and PostgreSQL messages.
_PATTERNS: tuple[tuple[type[ConstraintViolation], tuple[str, ...]], ...] = (
    (UniqueViolation, ("unique constraint", "duplicate key", "is not unique")),
    (ForeignKeyViolation, ("foreign key",)),
    (NotNullViolation, ("not null", "not-null")),
)


def classify_integrity_error(
    exc: IntegrityError, *, entity: str | None = None
) -> ConstraintViolation:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    lowered = message.lower()
    for violation, fragments in _PATTERNS:
        if any(fragment in lowered for fragment in fragments):
            return violation(message, entity=entity)
    return ConstraintViolation(message, entity=entity)


@contextmanager
def translate_integrity_errors(entity: str | None = None) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise classify_integrity_error(exc, entity=entity) from exc


# --- Module Notes -----------------------------------------------------------
# After a violation the session is in a failed state; the transaction owner
# (service layer) must roll back before reusing it.
