"""Approximate astronomy for the calendar.

All functions here are pure: they depend only on their arguments. The
formulas are deliberately cheap closed forms, good to within about a day
(seasons, moon) or an hour (sidereal time). They are not an ephemeris.
"""

from __future__ import annotations

import math
from datetime import date

from .types import MoonPhase, Season

# Leap year, so Feb 29 projects cleanly
REFERENCE_YEAR = 2000

# Approximate season starts, midway-ish between the quarter days
WINTER_START = (12, 15)
SPRING_START = (3, 15)
SUMMER_START = (6, 15)
FALL_START = (9, 15)

# Greenwich sidereal time at 2000-01-01 12:00 UT and its rate in hours/day
J2000_JD = 2451545.0
GST_AT_J2000 = 18.697375
GST_HOURS_PER_DAY = 24.065709824279


def normalize_hours(value: float) -> float:
    """Bring an hour value into [0, 24)."""
    value = math.fmod(value, 24)
    while value < 0:
        value += 24
    while value >= 24:
        value -= 24
    return value


def season_for(month: int, day: int) -> Season:
    """Season of a (month, day), projected onto the reference year."""
    probe = date(REFERENCE_YEAR, month, day)
    spring = date(REFERENCE_YEAR, *SPRING_START)
    summer = date(REFERENCE_YEAR, *SUMMER_START)
    fall = date(REFERENCE_YEAR, *FALL_START)
    winter = date(REFERENCE_YEAR, *WINTER_START)

    # Winter wraps across the year end
    if probe >= winter or probe < spring:
        return Season.WINTER
    if probe < summer:
        return Season.SPRING
    if probe < fall:
        return Season.SUMMER
    return Season.FALL


def moon_phase_for(year: int, day_of_year: int) -> MoonPhase:
    """Lunar phase from the year's golden number and epact.

    Returns a MoonPhase 1..8, 1 being new and 5 full.
    """
    golden = (year % 19) + 1
    epact = ((11 * golden) + 18) % 30
    if (epact == 25 and golden > 11) or epact == 24:
        epact += 1
    phase = ((((((day_of_year + epact) * 6) + 11) % 177) // 22) & 7) + 1
    return MoonPhase(phase)


def sidereal_time_for(julian_day: float) -> float:
    """Greenwich sidereal time, rounded to the hour, for a Julian day.

    Callers pass the Julian day of local midnight.
    """
    days = julian_day - J2000_JD
    gst = GST_AT_J2000 + GST_HOURS_PER_DAY * days
    # Round half up
    return normalize_hours(float(math.floor(gst + 0.5)))


def local_sidereal_time(sidereal_hour: float, hour: float, longitude: float = 0.0) -> float:
    """Offset a Greenwich sidereal hour by clock hour and longitude (degrees east)."""
    return normalize_hours(sidereal_hour + hour + longitude / 15.0)
