"""Exceptions raised by the calendar domain and services.

Every operation that raises one of these leaves its target unchanged.
"""

from __future__ import annotations


class CalendarError(Exception):
    """Base exception for Almanac errors."""

    pass


# -----------------------------------------------------------------------------
# Invalid arguments
# -----------------------------------------------------------------------------


class InvalidArgumentError(CalendarError):
    """A malformed value was passed in."""

    pass


class InvalidDateError(InvalidArgumentError):
    """Date parts or a date-time value could not be used."""

    def __init__(self, message: str, value: object | None = None):
        super().__init__(message)
        self.value = value


class InvalidTimezoneError(InvalidArgumentError):
    """Timezone label is not a known zone or offset."""

    def __init__(self, message: str, label: str | None = None):
        super().__init__(message)
        self.label = label


class InvalidPeriodError(InvalidArgumentError):
    """Period start hour is outside 0..23."""

    pass


class DuplicatePeriodError(InvalidArgumentError):
    """Period id or start hour collides with one already registered."""

    pass


# -----------------------------------------------------------------------------
# Lookups
# -----------------------------------------------------------------------------


class NotFoundError(CalendarError):
    """A lookup found nothing."""

    pass


class PeriodNotFoundError(NotFoundError):
    """No period with the given id in the cycle."""

    def __init__(self, message: str, period_id: str | None = None):
        super().__init__(message)
        self.period_id = period_id


class EmptyCycleError(NotFoundError):
    """Hour lookup against a cycle with no periods."""

    pass


# -----------------------------------------------------------------------------
# Preconditions
# -----------------------------------------------------------------------------


class PreconditionFailedError(CalendarError):
    """Calendar state does not allow the requested operation."""

    pass
