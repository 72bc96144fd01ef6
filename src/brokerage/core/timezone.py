"""Timezone utilities. All persisted timestamps are UTC."""

from datetime import datetime

import pytz

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # SQLite hands back naive values; they were written as UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)
