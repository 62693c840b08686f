"""
Calendar - the current date/time and everything derived from it.

The calendar owns a mutable current time, a (non-owned) DailyCycle used to
name the part of the day, and a cached DerivedSnapshot holding the season,
moon phase and sidereal hour for the current day.

Every mutation goes through set_date(), which:
- captures the period before and after the assignment
- drops the snapshot when the civil day changes
- publishes period_change, date_change and time_warp events, in that order

Queries accept an optional explicit value to probe instead of the current
time. Probes are computed directly and never touch the snapshot.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo

from almanac.domain import (
    DailyCycle,
    DateChangedEvent,
    DerivedSnapshot,
    InvalidDateError,
    MoonPhase,
    NotFoundError,
    Period,
    PeriodChangedEvent,
    PeriodId,
    PeriodNotFoundError,
    PreconditionFailedError,
    Season,
    TimeWarpEvent,
    invalidate_if_day_changed,
    local_sidereal_time,
    moon_phase_for,
    reset_snapshot,
    season_for,
    sidereal_time_for,
)
from almanac.domain import civil
from almanac.logging_config import log_cache, log_date_change, log_period_change

from .cycles import default_cycle
from .notifier import CalendarNotifier

logger = logging.getLogger(__name__)


class Calendar:
    """
    Tracks a current date/time and the values derived from it.

    Construct one per game or world and pass it to whatever needs it.
    """

    def __init__(
        self,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
        tz: str | None = None,
        cycle: DailyCycle | None = None,
        notifier: CalendarNotifier | None = None,
    ):
        """Initialize Calendar.

        Args:
            year: Starting year. If None, starts at the current moment.
            month: Starting month (default 1)
            day: Starting day (default 1)
            tz: Timezone label applied to every field query
            cycle: DailyCycle naming the periods of the day. If None, the
                default cycle is built on first use.
            notifier: Sink for change events. If None, no events are sent.

        Raises:
            InvalidDateError: If the parts don't form a date, or a month or
                day is given without a year
        """
        self._tz_label = tz
        self._tz = civil.resolve_timezone(tz)

        if year is None:
            if month is not None or day is not None:
                raise InvalidDateError(
                    f"Month and day need a year: month={month!r} day={day!r}",
                    value=(year, month, day),
                )
            current = datetime.now(self._tz)
        else:
            current = civil.make_datetime(
                year,
                1 if month is None else month,
                1 if day is None else day,
                tz=self._tz,
            )

        self._current: datetime = current
        self._starting: datetime = current
        self._cycle = cycle
        self._derived: DerivedSnapshot | None = None
        self.notifier = notifier

    @classmethod
    def from_datetime(cls, value: datetime, tz: str | None = None, **kwargs) -> Calendar:
        """Create a calendar starting at an existing datetime."""
        if not isinstance(value, datetime):
            raise InvalidDateError(f"Not a datetime: {value!r}", value=value)
        calendar = cls(2000, tz=tz, **kwargs)
        start = value if calendar._tz is None else calendar._adopt(value)
        calendar._current = start
        calendar._starting = start
        return calendar

    @classmethod
    def from_timestamp(cls, epoch_seconds: float, tz: str | None = None, **kwargs) -> Calendar:
        """Create a calendar starting at Unix epoch seconds."""
        return cls.from_datetime(civil.from_timestamp(epoch_seconds, civil.resolve_timezone(tz)), tz=tz, **kwargs)

    def __repr__(self) -> str:
        return f"Calendar(current={self._current.isoformat()}, tz={self._tz_label!r})"

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def current_time(self) -> datetime:
        return self._current

    @property
    def starting_time(self) -> datetime:
        """The value the calendar was created with."""
        return self._starting

    @property
    def tz(self) -> tzinfo | None:
        return self._tz

    @property
    def cycle(self) -> DailyCycle:
        """The active DailyCycle, building the default one if none is set."""
        if self._cycle is None:
            self._cycle = default_cycle()
        return self._cycle

    @cycle.setter
    def cycle(self, value: DailyCycle | None) -> None:
        self._cycle = value

    @property
    def derived(self) -> DerivedSnapshot | None:
        """The cached snapshot, if one has been built for the current day."""
        return self._derived

    def set_timezone(self, tz: str | None) -> None:
        """Change the zone used for field queries.

        The civil day and local midnight may differ in the new zone, so the
        snapshot is dropped. A naive current time is pinned to the new zone.
        """
        resolved = civil.resolve_timezone(tz)
        self._tz_label = tz
        self._tz = resolved
        if resolved is not None and self._current.tzinfo is None:
            self._current = self._current.replace(tzinfo=resolved)
            self._starting = self._starting.replace(tzinfo=resolved)
        self._derived = reset_snapshot(self._derived)
        log_cache(logger, "invalidate", details=f"timezone={tz}")

    # -------------------------------------------------------------------------
    # Field accessors
    # -------------------------------------------------------------------------

    def _view(self, value: datetime | None = None) -> datetime:
        """The probed value (or the current time) seen in the calendar's zone."""
        if value is None:
            value = self._current
        elif not isinstance(value, datetime):
            raise InvalidDateError(f"Not a datetime: {value!r}", value=value)
        return civil.project(value, self._tz)

    def year(self, value: datetime | None = None) -> int:
        return self._view(value).year

    def month(self, value: datetime | None = None) -> int:
        return self._view(value).month

    def month_name(self, value: datetime | None = None) -> str:
        return civil.month_name(self._view(value).month)

    def day(self, value: datetime | None = None) -> int:
        return self._view(value).day

    def day_of_year(self, value: datetime | None = None) -> int:
        return civil.day_of_year(self._view(value))

    def day_of_week(self, value: datetime | None = None) -> int:
        """1 = Sunday through 7 = Saturday."""
        return civil.day_of_week(self._view(value))

    def day_name(self, value: datetime | None = None) -> str:
        return civil.day_name(self._view(value))

    def hour(self, value: datetime | None = None) -> int:
        return self._view(value).hour

    def minute(self, value: datetime | None = None) -> int:
        return self._view(value).minute

    def timezone_label(self, value: datetime | None = None) -> str | None:
        """The configured label, or the value's own zone name if none is configured."""
        if self._tz_label is not None:
            return self._tz_label
        return self._view(value).tzname()

    def timezone_offset(self, value: datetime | None = None) -> float | None:
        """UTC offset in hours, or None for naive values."""
        offset = self._view(value).utcoffset()
        if offset is None:
            return None
        return offset / timedelta(hours=1)

    def julian_day(self, value: datetime | None = None) -> float:
        return civil.julian_day(self._view(value))

    def timestamp(self, value: datetime | None = None) -> float:
        """Unix epoch seconds."""
        return self._view(value).timestamp()

    def _day_key(self, value: datetime | None = None) -> tuple[int, int]:
        view = self._view(value)
        return (civil.day_of_year(view), view.year)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    def _snapshot(self) -> DerivedSnapshot:
        """The snapshot for the current day, building it if needed."""
        key = self._day_key()
        if self._derived is None or not self._derived.is_valid_for(key):
            self._derived = self._build_snapshot(self._view())
            log_cache(logger, "build", key=key)
        return self._derived

    def _build_snapshot(self, view: datetime) -> DerivedSnapshot:
        return DerivedSnapshot(
            year=view.year,
            day_of_year=civil.day_of_year(view),
            season=season_for(view.month, view.day),
            moon_phase=moon_phase_for(view.year, civil.day_of_year(view)),
            sidereal_hour=self._sidereal_for(view),
        )

    def _sidereal_for(self, view: datetime) -> float:
        return sidereal_time_for(civil.julian_day_at_midnight(view.year, view.month, view.day, self._tz))

    def get_season(self, value: datetime | None = None) -> Season:
        """Season of the current day, or of an explicit probe value."""
        if value is not None:
            view = self._view(value)
            return season_for(view.month, view.day)
        return self._snapshot().season

    def get_moon_phase(self, value: datetime | None = None) -> MoonPhase:
        """Moon phase 1..8 of the current day, or of an explicit probe value."""
        if value is not None:
            view = self._view(value)
            return moon_phase_for(view.year, civil.day_of_year(view))
        return self._snapshot().moon_phase

    def get_sidereal_time(self, value: datetime | None = None) -> float:
        """Greenwich sidereal hour at local midnight of the day."""
        if value is not None:
            return self._sidereal_for(self._view(value))
        return self._snapshot().sidereal_hour

    def get_local_sidereal_time(self, hour: float | None = None, longitude: float = 0.0) -> float:
        """Sidereal hour offset by a clock hour and a longitude (degrees east).

        Args:
            hour: Hours past midnight (default: the current hour)
            longitude: Observer longitude in degrees, east positive
        """
        if hour is None:
            hour = self.hour()
        return local_sidereal_time(self.get_sidereal_time(), hour, longitude)

    # -------------------------------------------------------------------------
    # Periods
    # -------------------------------------------------------------------------

    def match_period(self, hour: int | None = None) -> PeriodId:
        """Id of the period owning an hour (default: the current hour)."""
        if hour is None:
            hour = self.hour()
        return self.cycle.match_period(hour)

    def current_period(self) -> PeriodId:
        return self.match_period()

    def _period_or_none(self) -> PeriodId | None:
        """Current period for change detection; None if the cycle can't say."""
        try:
            return self.current_period()
        except NotFoundError:
            return None

    def _at_period(self, base: datetime, period: Period) -> datetime:
        return civil.normalize(base.replace(hour=period.start_hour, minute=0, second=0, microsecond=0, fold=0))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _adopt(self, value: datetime) -> datetime:
        """Validate a new value; naive values are read in the calendar's zone.

        Without a zone the calendar keeps to whichever kind of value it
        started with: naive stays naive, aware stays aware.
        """
        if not isinstance(value, datetime):
            logger.warning(f"Rejected date value: {value!r}")
            raise InvalidDateError(f"Not a datetime: {value!r}", value=value)
        if self._tz is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=self._tz)
        elif (value.tzinfo is None) != (self._current.tzinfo is None):
            logger.warning(f"Rejected date value mixing naive and aware times: {value!r}")
            raise InvalidDateError(
                f"Calendar holds {'naive' if self._current.tzinfo is None else 'aware'} times: {value!r}",
                value=value,
            )
        return value

    def set_date(self, value: datetime, warp: bool = False) -> None:
        """
        Replace the current time.

        All other mutators route through here.

        Args:
            value: The new current time
            warp: True if this is a jump rather than ordinary advancement

        Raises:
            InvalidDateError: If value is not a datetime, or mixes naive and
                aware times on a calendar without a zone (nothing changes)
        """
        value = self._adopt(value)
        previous = self._current
        if civil.same_instant(value, previous):
            return

        old_period = self._period_or_none()
        self._current = value
        new_period = self._period_or_none()

        key = self._day_key()
        snapshot = invalidate_if_day_changed(self._derived, key)
        if snapshot is None and self._derived is not None:
            log_cache(logger, "invalidate", key=key)
        self._derived = snapshot

        log_date_change(logger, previous, value, warp=warp)
        self._notify(previous, old_period, new_period, warp)

    def _notify(
        self,
        previous: datetime,
        old_period: PeriodId | None,
        new_period: PeriodId | None,
        warp: bool,
    ) -> None:
        if old_period != new_period:
            log_period_change(logger, old_period, new_period, when=self._current)
        if self.notifier is None:
            return

        if old_period != new_period:
            self.notifier.publish(PeriodChangedEvent(
                timestamp=self._current,
                old_period=old_period,
                new_period=new_period,
            ))
        self.notifier.publish(DateChangedEvent(timestamp=self._current, previous=previous))
        if warp:
            self.notifier.publish(TimeWarpEvent(timestamp=self._current, previous=previous))

    def warp_to(self, value: datetime) -> None:
        """Jump to a new time, flagged as a time warp."""
        self.set_date(value, warp=True)

    def set_ymd(self, year: int, month: int, day: int, tz: str | None = None) -> None:
        """Move to a civil date, keeping the time of day.

        Args:
            tz: If given, also becomes the calendar's timezone
        """
        zone = civil.resolve_timezone(tz) if tz is not None else self._tz
        view = self._view()
        value = civil.make_datetime(year, month, day, view.hour, view.minute, view.second, tz=zone)
        if tz is not None:
            self.set_timezone(tz)
        self.set_date(value, warp=True)

    def set_time(self, hour: int) -> None:
        """Set the hour of the current day (wrapped into 0..23), zeroing minutes.

        An hour skipped by a DST change resolves to the instant after the gap.
        """
        value = self._view().replace(hour=hour % 24, minute=0, second=0, microsecond=0, fold=0)
        self.set_date(civil.normalize(value))

    def advance_hour(self, hours: int = 1) -> None:
        self.set_date(civil.add_interval(self._view(), hours=hours))

    def advance_day(self, days: int = 1) -> None:
        self.set_date(civil.add_interval(self._view(), days=days))

    def advance_month(self, months: int = 1) -> None:
        self.set_date(civil.add_interval(self._view(), months=months))

    def advance_year(self, years: int = 1) -> None:
        self.set_date(civil.add_interval(self._view(), years=years))

    def set_period(self, period_id: str) -> None:
        """Move to the start hour of a period on the current day.

        Raises:
            PeriodNotFoundError: If the active cycle has no such period
        """
        period = self.cycle.get_period(period_id)
        self.set_date(self._at_period(self._view(), period))

    def set_period_next_day(self, period_id: str) -> None:
        """Move to the start of a period on the following day."""
        period = self.cycle.get_period(period_id)
        next_day = civil.add_interval(self._view(), days=1)
        self.set_date(self._at_period(next_day, period))

    def set_date_and_period(self, year: int, month: int, day: int, period_id: str) -> None:
        """Jump to a civil date at the start of a period."""
        period = self.cycle.get_period(period_id)
        value = civil.make_datetime(year, month, day, period.start_hour, tz=self._tz)
        self.set_date(value, warp=True)

    def advance_period(self) -> PeriodId:
        """
        Move to the start of the next period.

        Past the last period of the day the calendar moves to the first
        period of the following day, even when the last period has run on
        past midnight.

        Returns:
            The id of the period now current

        Raises:
            PreconditionFailedError: If no current period resolves or it is
                not in the cycle's sequence
        """
        try:
            current = self.current_period()
        except NotFoundError as e:
            raise PreconditionFailedError(f"No current period to advance from: {e}") from e

        cycle = self.cycle
        if not cycle.periods:
            raise PreconditionFailedError(f"Cycle {cycle.name!r} has no period sequence")
        try:
            following, wrapped = cycle.next_period(current)
        except PeriodNotFoundError as e:
            raise PreconditionFailedError(
                f"Current period {current!r} is not in the sequence of {cycle.name!r}"
            ) from e

        base = self._view()
        if wrapped:
            base = civil.add_interval(base, days=1)
        self.set_date(self._at_period(base, following))
        return following.id

    # -------------------------------------------------------------------------
    # Differences
    # -------------------------------------------------------------------------

    def date_diff(self, value: datetime) -> float:
        """Days from value to the current time (positive if value is earlier)."""
        value = self._adopt(value)
        current = self._current
        if current.tzinfo is not None and value.tzinfo is not None:
            # Same-zone subtraction ignores fold; UTC does not
            current, value = current.astimezone(timezone.utc), value.astimezone(timezone.utc)
        try:
            return (current - value) / timedelta(days=1)
        except TypeError as e:
            raise InvalidDateError(f"Cannot compare {value!r} with the current time", value=value) from e

    def elapsed_days(self) -> float:
        """Days since the calendar was created."""
        return self.date_diff(self._starting)
