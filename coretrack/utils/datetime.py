"""Clock helpers bound to the configured application timezone.

Columns are stored as naive ``DATETIME`` values expressed in the application
timezone; entities and API payloads carry aware datetimes.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from coretrack.config import get_settings

_FALLBACK_TIMEZONE: Final[tzinfo] = timezone.utc
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_offset(name: str) -> tzinfo | None:
    match = _UTC_OFFSET.match(name)
    if match is None:
        return None
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    if match.group("sign") == "-":
        offset = -offset
    return timezone(offset)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Resolve ``APP_TIMEZONE`` as an IANA name or a ``UTC+HH:MM`` offset.

    Unknown values fall back to UTC.
    """

    name = (get_settings().app_timezone or "").strip()
    if not name:
        return _FALLBACK_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return _parse_offset(name) or _FALLBACK_TIMEZONE


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def today_in_app_timezone() -> date:
    """Calendar date used for overdue checks and "today" counters."""

    return now_in_app_timezone().date()


def start_of_today() -> datetime:
    return now_in_app_timezone().replace(hour=0, minute=0, second=0, microsecond=0)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the application timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Convert ``value`` to the application timezone and drop ``tzinfo``."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``created_at``/``updated_at``."""

    return now_in_app_timezone().replace(tzinfo=None)
