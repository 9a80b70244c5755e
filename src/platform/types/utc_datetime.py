"""
Timezone-aware UTC datetime column type.

PostgreSQL `timestamptz` returns aware datetimes, SQLite stores naive text.
`UtcDateTime` normalizes both directions so the domain only ever sees aware UTC values.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UtcDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Dialect) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f'Naive datetime is not allowed: {value!r}')
        value = value.astimezone(timezone.utc)
        if dialect.name == 'sqlite':
            # SQLite compares the stored text lexically, every value must share one naive UTC format
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect: Dialect) -> Optional[datetime]:
        if value is None:
            return None
        return ensure_utc(value)
