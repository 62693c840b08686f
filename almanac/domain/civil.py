"""Civil date/time helpers.

Python's ``datetime`` is the date primitive. This module adds the pieces
the calendar needs on top of it: timezone label resolution, projection of
a value into the calendar's zone, calendar-interval arithmetic, and Julian
day conversion.

Naive values are treated as UTC for Julian day purposes.
"""

from __future__ import annotations

import calendar as _stdlib_calendar
import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidDateError, InvalidTimezoneError

# Julian day of the Unix epoch (1970-01-01T00:00:00Z)
UNIX_EPOCH_JD = 2440587.5
SECONDS_PER_DAY = 86400.0

_OFFSET_PATTERN = re.compile(r"^([+-])(\d{1,2}):?(\d{2})$")


def resolve_timezone(label: str | None) -> tzinfo | None:
    """Turn an opaque timezone label into a tzinfo.

    Accepts IANA names ("America/New_York"), "UTC"/"Z", and fixed offsets
    ("+05:30", "-0800").

    Raises:
        InvalidTimezoneError: If the label is not recognised
    """
    if label is None:
        return None
    if label in ("UTC", "Z", "utc"):
        return timezone.utc

    match = _OFFSET_PATTERN.match(label)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        if offset >= timedelta(hours=24):
            raise InvalidTimezoneError(f"Offset out of range: {label}", label=label)
        return timezone(-offset if sign == "-" else offset, name=label)

    try:
        return ZoneInfo(label)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(f"Unknown timezone: {label}", label=label) from e


def make_datetime(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    tz: tzinfo | None = None,
) -> datetime:
    """Build a datetime from parts, raising InvalidDateError on bad parts."""
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(
            f"Invalid date parts: {year}-{month}-{day} {hour}:{minute}:{second}",
            value=(year, month, day, hour, minute, second),
        ) from e


def from_timestamp(epoch_seconds: float, tz: tzinfo | None = None) -> datetime:
    """Build a datetime from Unix epoch seconds."""
    try:
        return datetime.fromtimestamp(epoch_seconds, tz)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise InvalidDateError(f"Invalid timestamp: {epoch_seconds!r}", value=epoch_seconds) from e


def project(value: datetime, tz: tzinfo | None) -> datetime:
    """View a value in the given zone.

    With no zone the value is returned untouched. Naive values are taken to
    already be wall-clock time in ``tz``.
    """
    if tz is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def add_interval(
    value: datetime,
    years: int = 0,
    months: int = 0,
    days: int = 0,
    hours: int = 0,
) -> datetime:
    """Add a calendar interval.

    Years, months and days move the calendar fields, clamping the day to the
    length of the target month (Jan 31 + 1 month = Feb 28/29). Hours are
    elapsed time: on an aware value they are added on the UTC timeline, so
    a DST change neither repeats nor skips an hour.
    """
    if years or months:
        total_months = value.month - 1 + months + 12 * years
        year = value.year + total_months // 12
        month = total_months % 12 + 1
        last_day = _stdlib_calendar.monthrange(year, month)[1]
        try:
            value = value.replace(year=year, month=month, day=min(value.day, last_day))
        except ValueError as e:
            raise InvalidDateError(f"Interval leaves supported range: year {year}", value=value) from e
    try:
        value = value + timedelta(days=days)
        if hours and value.tzinfo is not None:
            zone = value.tzinfo
            return (value.astimezone(timezone.utc) + timedelta(hours=hours)).astimezone(zone)
        return normalize(value + timedelta(hours=hours))
    except OverflowError as e:
        raise InvalidDateError("Interval leaves supported range", value=value) from e


def normalize(value: datetime) -> datetime:
    """Resolve a wall-clock value that a DST gap skipped to a real instant.

    02:30 on a spring-forward night becomes 03:30. Naive values and values
    that exist are returned unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).astimezone(value.tzinfo)


def same_instant(a: datetime, b: datetime) -> bool:
    """True if two values name the same moment, telling folded hours apart.

    Values sharing a tzinfo compare by wall-clock fields alone, so 01:30 EDT
    equals 01:30 EST under ``==``.
    """
    if (a.tzinfo is None) != (b.tzinfo is None):
        return False
    if a.tzinfo is None:
        return a == b
    return a.astimezone(timezone.utc) == b.astimezone(timezone.utc)


def julian_day(value: datetime) -> float:
    """Julian day of an instant."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp() / SECONDS_PER_DAY + UNIX_EPOCH_JD


def julian_day_at_midnight(year: int, month: int, day: int, tz: tzinfo | None = None) -> float:
    """Julian day of local midnight starting the given civil date."""
    return julian_day(make_datetime(year, month, day, tz=tz))


def day_of_week(value: datetime) -> int:
    """Day of week, 1 = Sunday through 7 = Saturday."""
    return value.isoweekday() % 7 + 1


def day_of_year(value: datetime) -> int:
    return value.timetuple().tm_yday


def month_name(month: int) -> str:
    return _stdlib_calendar.month_name[month]


def day_name(value: datetime) -> str:
    return _stdlib_calendar.day_name[value.weekday()]
