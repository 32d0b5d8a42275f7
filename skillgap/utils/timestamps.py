"""UTC helpers for posting dates.

Posting timestamps arrive from many feeds, some without an offset. The engine
treats naive values as UTC and compares everything as aware datetimes.
"""

from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 86400.0


def utc_now() -> datetime:
    """Aware ``datetime`` for the current instant in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Normalize ``dt`` to aware UTC; naive input is read as UTC, None passes through.

    Example:
        >>> ensure_utc(datetime(2026, 3, 1, 9, 30)).isoformat()
        '2026-03-01T09:30:00+00:00'
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def age_in_days(dt: datetime, now: Optional[datetime] = None) -> float:
    """Fractional days between ``dt`` and ``now``; negative when ``dt`` is later."""
    reference = utc_now() if now is None else ensure_utc(now)
    return (reference - ensure_utc(dt)).total_seconds() / SECONDS_PER_DAY
