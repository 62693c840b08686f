"""Periods and daily cycles.

A Period is a named part of the day defined only by its starting hour; it
runs until the next period starts. A DailyCycle collects periods and keeps
a dense 24-slot table mapping each hour to the period that owns it.

The period with the highest start hour owns the tail of the day and wraps
past midnight into the hours before the earliest period starts.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from almanac.logging_config import log_cycle

from .errors import (
    DuplicatePeriodError,
    EmptyCycleError,
    InvalidPeriodError,
    PeriodNotFoundError,
)
from .types import PeriodId

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class Period(BaseModel):
    """A named interval of the day."""

    model_config = ConfigDict(frozen=True)

    id: PeriodId
    name: str | None = None
    start_hour: int = Field(ge=0, le=HOURS_PER_DAY - 1)

    @property
    def display_name(self) -> str:
        """Name if one was given, otherwise the id."""
        return self.name if self.name is not None else self.id


class DailyCycle:
    """Collection of periods with an O(1) hour lookup.

    The hour table is rebuilt from scratch every time a period is added.
    Until at least one period is registered there is no table and hour
    lookups raise EmptyCycleError.
    """

    def __init__(self, name: str = "cycle", periods: list[Period] | None = None):
        self.name = name
        self._periods: dict[PeriodId, Period] = {}
        self._ordered: tuple[Period, ...] = ()
        self._hour_table: list[PeriodId] | None = None

        for period in periods or []:
            self.add_period(period)

    def __len__(self) -> int:
        return len(self._periods)

    def __contains__(self, period_id: object) -> bool:
        return period_id in self._periods

    def __repr__(self) -> str:
        return f"DailyCycle(name={self.name!r}, periods={list(self.period_ids)!r})"

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_period(self, period: Period) -> None:
        """Register a period and rebuild the hour table.

        Raises:
            DuplicatePeriodError: If the id or start hour is already taken
            InvalidPeriodError: If the start hour is outside 0..23
        """
        if not isinstance(period.start_hour, int) or not 0 <= period.start_hour < HOURS_PER_DAY:
            raise InvalidPeriodError(
                f"Period {period.id!r} has start hour {period.start_hour!r}, expected 0..23"
            )
        if period.id in self._periods:
            raise DuplicatePeriodError(f"Period {period.id!r} already exists in {self.name!r}")
        for existing in self._periods.values():
            if existing.start_hour == period.start_hour:
                raise DuplicatePeriodError(
                    f"Period {period.id!r} starts at hour {period.start_hour}, "
                    f"already taken by {existing.id!r}"
                )

        self._periods[period.id] = period
        self._rebuild()
        log_cycle(logger, self.name, "add_period", f"{period.id}@{period.start_hour:02d}")

    def _rebuild(self) -> None:
        """Recompute the ordered period list and the hour table."""
        ordered = sorted(self._periods.values(), key=lambda p: p.start_hour)
        table: list[PeriodId] = []

        # The last period of the day owns the early hours
        carry = ordered[-1].id
        for period in ordered:
            while len(table) <= period.start_hour:
                table.append(carry)
            table[period.start_hour] = period.id
            carry = period.id
        while len(table) < HOURS_PER_DAY:
            table.append(carry)

        self._ordered = tuple(ordered)
        self._hour_table = table

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def periods(self) -> tuple[Period, ...]:
        """Registered periods, ascending by start hour."""
        return self._ordered

    @property
    def period_ids(self) -> tuple[PeriodId, ...]:
        return tuple(p.id for p in self._ordered)

    @property
    def hour_table(self) -> tuple[PeriodId, ...] | None:
        """Owning period id for hours 0..23, or None if the cycle is empty."""
        if self._hour_table is None:
            return None
        return tuple(self._hour_table)

    def match_period(self, hour: int) -> PeriodId:
        """Get the id of the period owning an hour.

        Hours outside 0..23 wrap, so 25 is 1 and -1 is 23.

        Raises:
            EmptyCycleError: If no periods are registered
        """
        if self._hour_table is None:
            raise EmptyCycleError(f"Cycle {self.name!r} has no periods")
        return self._hour_table[hour % HOURS_PER_DAY]

    def period_for(self, hour: int) -> Period:
        """Like match_period, but returns the Period itself."""
        return self._periods[self.match_period(hour)]

    def get_period(self, period_id: str) -> Period:
        """Look up a period by id.

        Raises:
            PeriodNotFoundError: If the id is not registered
        """
        try:
            return self._periods[PeriodId(period_id)]
        except KeyError:
            raise PeriodNotFoundError(
                f"No period {period_id!r} in cycle {self.name!r}", period_id=period_id
            ) from None

    def next_period(self, period_id: str) -> tuple[Period, bool]:
        """Get the period after the given one.

        Returns:
            (next period, True if the sequence wrapped past the last period)

        Raises:
            PeriodNotFoundError: If the id is not in the ordered sequence
        """
        for index, period in enumerate(self._ordered):
            if period.id == period_id:
                position = index + 1
                if position >= len(self._ordered):
                    return self._ordered[0], True
                return self._ordered[position], False
        raise PeriodNotFoundError(
            f"Period {period_id!r} is not in the sequence of {self.name!r}", period_id=period_id
        )
