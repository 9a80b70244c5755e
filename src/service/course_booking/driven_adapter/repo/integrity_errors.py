"""Classify IntegrityError by the driver message, PostgreSQL and SQLite word them differently"""

from typing import Iterable

from sqlalchemy.exc import IntegrityError


_FOREIGN_KEY_MARKERS = (
    'FOREIGN KEY constraint failed',  # SQLite
    'violates foreign key constraint',  # PostgreSQL
)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in _FOREIGN_KEY_MARKERS)


def is_unique_violation(error: IntegrityError, markers: Iterable[str]) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in markers)
