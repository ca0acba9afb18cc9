"""UTC helpers shared by the entities and the persistence layer.

Columns are stored as naive ``DATETIME`` values in UTC so one schema works on
SQLite and server databases; the domain layer only ever sees aware values.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def naive_utc_now() -> datetime:
    """Column default: the current UTC time without ``tzinfo``."""

    return utc_now().replace(tzinfo=None)


def as_utc(value: datetime | None) -> datetime | None:
    """Read a stored value back as an aware UTC datetime."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime | None) -> datetime | None:
    aware = as_utc(value)
    return aware.replace(tzinfo=None) if aware else None
