"""Foundational types for Almanac.

This module defines the small value types shared across the domain:
- PeriodId: identifier of a Period within its DailyCycle
- Season: the four approximate seasons
- MoonPhase: the eight lunar phases, numbered 1..8
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import NewType

# Type aliases for domain identifiers
PeriodId = NewType("PeriodId", str)


class Season(Enum):
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


class MoonPhase(IntEnum):
    """Lunar phase as an integer 1..8.

    Odd values are the principal phases, even values the intermediate
    crescent/gibbous phases between them.
    """

    NEW = 1
    WAXING_CRESCENT = 2
    FIRST_QUARTER = 3
    WAXING_GIBBOUS = 4
    FULL = 5
    WANING_GIBBOUS = 6
    LAST_QUARTER = 7
    WANING_CRESCENT = 8

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'first quarter'."""
        return self.name.lower().replace("_", " ")
