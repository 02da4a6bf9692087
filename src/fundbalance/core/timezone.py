"""Timezone utilities for record timestamps."""

from datetime import datetime

import pytz

from fundbalance.config.settings import get_settings


def get_reporting_tz() -> pytz.BaseTzInfo:
    """Return the configured reporting timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the reporting timezone."""
    return datetime.now(get_reporting_tz())


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the reporting timezone."""
    tz = get_reporting_tz()
    if dt.tzinfo is None:
        # SQLite drops tzinfo; stored values are UTC
        return pytz.utc.localize(dt).astimezone(tz)
    return dt.astimezone(tz)


def to_utc_naive(dt: datetime) -> datetime:
    """Convert an aware datetime to naive UTC for storage."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.utc).replace(tzinfo=None)
