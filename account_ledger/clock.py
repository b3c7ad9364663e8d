"""
Server clock and calendar-day helpers.

Timestamps are stored as naive UTC because SQLite drops the
offset of timezone-aware values. Calendar days are computed in
an explicitly configured zone, never the host's local zone.
"""

from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_timezone(name: str) -> tzinfo:
    """Map a zone name such as ``UTC`` or ``America/Sao_Paulo`` to a tzinfo."""
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)


def local_day(stored: datetime, tz: tzinfo) -> date:
    """Calendar day of a stored (naive UTC) timestamp as seen in ``tz``."""
    if stored.tzinfo is None:
        stored = stored.replace(tzinfo=timezone.utc)
    return stored.astimezone(tz).date()
