"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?:(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?)?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo | None:
    """Return the configured application timezone, or ``None`` when unset.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` model). Values that cannot be resolved fall back to UTC.
    """

    tz_name = (get_settings().app_timezone or "").strip()
    if not tz_name:
        return None
    return _resolve_timezone(tz_name)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Return ``value`` as an aware datetime for presentation.

    ``DATETIMEOFFSET`` columns come back timezone-aware and keep their stored
    offset unless an application timezone is configured. Stores without offset
    support (SQLite) return naive values produced by ``CURRENT_TIMESTAMP``,
    which are UTC.
    """

    if value is None:
        return None

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    app_timezone = get_app_timezone()
    if app_timezone is None:
        return value
    return value.astimezone(app_timezone)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match and match.group("sign") is not None:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            return timezone(sign * timedelta(hours=hours, minutes=minutes))
    return timezone.utc
