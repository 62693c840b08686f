"""
Almanac - a calendrical engine for interactive fiction.

Tracks a mutable current date/time and derives from it:
- the season, moon phase and sidereal time (cached per day)
- the named period of the day (e.g. canonical hours) via a DailyCycle
- change events for subscribers when the date or period moves

Example usage:
    from almanac import Calendar, CalendarNotifier, load_cycles

    notifier = CalendarNotifier()
    notifier.subscribe(print, kinds=["period_change"])

    calendar = Calendar(1979, 6, 22, tz="UTC", notifier=notifier)
    calendar.cycle = load_cycles()["canonical_hours"]
    calendar.set_period("vespers")
    calendar.advance_period()
"""

__version__ = "0.1.0"

from .domain import (
    PeriodId,
    Season,
    MoonPhase,
    Period,
    DailyCycle,
    CalendarEvent,
    DateChangedEvent,
    PeriodChangedEvent,
    TimeWarpEvent,
    CalendarError,
)
from .services import (
    Calendar,
    CalendarNotifier,
    load_cycles,
    default_cycle,
)
from .logging_config import setup_logging

__all__ = [
    "Calendar",
    "CalendarNotifier",
    "DailyCycle",
    "Period",
    "PeriodId",
    "Season",
    "MoonPhase",
    "CalendarEvent",
    "DateChangedEvent",
    "PeriodChangedEvent",
    "TimeWarpEvent",
    "CalendarError",
    "load_cycles",
    "default_cycle",
    "setup_logging",
]
