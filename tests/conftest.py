"""Shared pytest fixtures for Almanac tests."""

import pytest
from datetime import datetime

from almanac.domain import (
    CalendarEvent,
    DailyCycle,
    Period,
    PeriodId,
)
from almanac.services import Calendar, CalendarNotifier, load_cycles


# =============================================================================
# Periods and Cycles
# =============================================================================

@pytest.fixture
def day_periods() -> list[Period]:
    """Five periods starting at hours 4, 8, 12, 19 and 22."""
    return [
        Period(id=PeriodId("early_morning"), name="early morning", start_hour=4),
        Period(id=PeriodId("morning"), start_hour=8),
        Period(id=PeriodId("afternoon"), start_hour=12),
        Period(id=PeriodId("evening"), start_hour=19),
        Period(id=PeriodId("night"), start_hour=22),
    ]


@pytest.fixture
def day_cycle(day_periods: list[Period]) -> DailyCycle:
    """A cycle with the five day periods, registered out of order."""
    cycle = DailyCycle(name="test_day")
    for index in (3, 0, 4, 2, 1):
        cycle.add_period(day_periods[index])
    return cycle


@pytest.fixture
def canonical_cycle() -> DailyCycle:
    """The packaged canonical hours cycle."""
    return load_cycles()["canonical_hours"]


@pytest.fixture
def empty_cycle() -> DailyCycle:
    return DailyCycle(name="empty")


# =============================================================================
# Calendars
# =============================================================================

@pytest.fixture
def base_datetime() -> datetime:
    """Midsummer 1979, at the start of the afternoon."""
    return datetime(1979, 6, 22, 12, 0, 0)


@pytest.fixture
def notifier() -> CalendarNotifier:
    return CalendarNotifier()


@pytest.fixture
def received(notifier: CalendarNotifier) -> list[CalendarEvent]:
    """Every event the notifier delivers, in order."""
    events: list[CalendarEvent] = []
    notifier.subscribe(events.append)
    return events


@pytest.fixture
def calendar(day_cycle: DailyCycle, notifier: CalendarNotifier) -> Calendar:
    """A UTC calendar on 1979-06-22 at midnight, using the day cycle."""
    return Calendar(1979, 6, 22, tz="UTC", cycle=day_cycle, notifier=notifier)


@pytest.fixture
def afternoon_calendar(calendar: Calendar) -> Calendar:
    """The calendar moved to 18:00, the last hour of the afternoon."""
    calendar.set_time(18)
    return calendar
