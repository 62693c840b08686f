"""Domain models for Almanac.

Pure models with no I/O: periods and cycles, civil time helpers, the
approximate astronomy, cached snapshots and change events.

Usage:
    from almanac.domain import Period, DailyCycle, Season, CalendarEvent
"""

# Types
from .types import PeriodId, Season, MoonPhase

# Errors
from .errors import (
    CalendarError,
    InvalidArgumentError,
    InvalidDateError,
    InvalidTimezoneError,
    InvalidPeriodError,
    DuplicatePeriodError,
    NotFoundError,
    PeriodNotFoundError,
    EmptyCycleError,
    PreconditionFailedError,
)

# Periods
from .period import HOURS_PER_DAY, Period, DailyCycle

# Astronomy
from .astronomy import (
    season_for,
    moon_phase_for,
    sidereal_time_for,
    local_sidereal_time,
    normalize_hours,
)

# Cache
from .snapshot import DerivedSnapshot, invalidate_if_day_changed, reset_snapshot

# Events
from .events import (
    EventKind,
    DateChangedEvent,
    PeriodChangedEvent,
    TimeWarpEvent,
    CalendarEvent,
)

__all__ = [
    "PeriodId",
    "Season",
    "MoonPhase",
    "CalendarError",
    "InvalidArgumentError",
    "InvalidDateError",
    "InvalidTimezoneError",
    "InvalidPeriodError",
    "DuplicatePeriodError",
    "NotFoundError",
    "PeriodNotFoundError",
    "EmptyCycleError",
    "PreconditionFailedError",
    "HOURS_PER_DAY",
    "Period",
    "DailyCycle",
    "season_for",
    "moon_phase_for",
    "sidereal_time_for",
    "local_sidereal_time",
    "normalize_hours",
    "DerivedSnapshot",
    "invalidate_if_day_changed",
    "reset_snapshot",
    "EventKind",
    "DateChangedEvent",
    "PeriodChangedEvent",
    "TimeWarpEvent",
    "CalendarEvent",
]
