"""Date manipulation utilities"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Current wall-clock instant as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def resolve_as_of(as_of: Optional[datetime] = None) -> datetime:
    """Reference instant for windowed calculations (defaults to now, naive values read as UTC)"""
    if as_of is None:
        return utc_now()
    if as_of.tzinfo is None:
        return as_of.replace(tzinfo=timezone.utc)
    return as_of


def parse_date(value: object) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Date-only strings resolve to midnight UTC. Anything unparsable returns None
    so callers can exclude the record instead of failing.
    """
    if isinstance(value, datetime):
        return resolve_as_of(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def days_between(a: datetime, b: datetime) -> float:
    """Absolute distance between two instants in fractional days"""
    return abs((a - b).total_seconds()) / SECONDS_PER_DAY


def window_start(as_of: datetime, days: int) -> datetime:
    """Lower bound of a trailing window of `days` ending at `as_of`"""
    return as_of - timedelta(days=days)
