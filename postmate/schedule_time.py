"""Conversion between the fixed UTC+9 display offset and UTC storage.

All user-facing dates and times are read as Japan Standard Time regardless of
the server locale. The offset is fixed, not an IANA zone, so no DST rules
apply.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

from .config import LOCAL_UTC_OFFSET

LOCAL_TZ = timezone(LOCAL_UTC_OFFSET, "JST")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


def local_to_utc(date: str, time: str) -> datetime:
    """Interpret a local date (YYYY-MM-DD) and time (HH:MM) and return UTC."""
    naive = datetime.strptime(f"{date.strip()} {time.strip()[:5]}", DISPLAY_FORMAT)
    return (naive - LOCAL_UTC_OFFSET).replace(tzinfo=timezone.utc)


def utc_to_local(instant: datetime) -> datetime:
    """Shift a UTC instant to the display offset."""
    return _as_utc(instant).astimezone(LOCAL_TZ)


def split_local(instant: datetime) -> Tuple[str, str]:
    """Return the (date, time) strings that reproduce `instant` in the composer."""
    local = utc_to_local(instant)
    return local.strftime(DATE_FORMAT), local.strftime(TIME_FORMAT)


def format_local(instant: datetime | None) -> str:
    if instant is None:
        return "Immediate"
    return utc_to_local(instant).strftime(DISPLAY_FORMAT)


def to_storage(instant: datetime | None) -> str:
    """ISO-8601 UTC literal with a Z suffix, blank for immediate posts."""
    if instant is None:
        return ""
    utc = _as_utc(instant)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_instant(text: str | None) -> datetime | None:
    """Parse a stored schedule literal.

    Accepts "YYYY-MM-DD HH:MM" and ISO-8601 (with Z, an offset, or naive).
    Naive values are UTC. Returns None for blank or unparseable input.
    """
    if not text:
        return None
    value = str(text).strip()
    if not value:
        return None

    try:
        parsed = datetime.strptime(value, DISPLAY_FORMAT)
        return parsed.replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    if value.endswith("Z") or value.endswith("z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return _as_utc(parsed)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)
