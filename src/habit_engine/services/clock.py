"""Local calendar helpers.

Check-ins are keyed by the user's local calendar date, never by UTC, so a
late-evening check-in is not filed under the next day.
"""

from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def resolve_timezone(timezone_name: str) -> ZoneInfo:
    """Return the named zone, falling back to UTC for unknown names."""
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def local_today(timezone_name: str, now: datetime | None = None) -> date:
    """Return the current date in the user's timezone."""
    tz = resolve_timezone(timezone_name)
    instant = now or datetime.now(tz=UTC)
    return instant.astimezone(tz).date()


def local_date_of(instant: datetime, tz: ZoneInfo) -> date:
    """Return the local calendar date of an instant (naive means UTC)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(tz).date()


def start_of_day(day: date, tz: ZoneInfo) -> datetime:
    """Return local midnight of a date as a UTC instant."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(UTC)


def instant_on(day: date, tz: ZoneInfo, now: datetime | None = None) -> datetime:
    """Return now if it falls on the given local date, else that day's midnight."""
    instant = now or datetime.now(tz=UTC)
    if local_date_of(instant, tz) == day:
        return instant
    return start_of_day(day, tz)
