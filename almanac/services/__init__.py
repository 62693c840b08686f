"""Stateful services for Almanac: the calendar, its notifier, and cycle loading."""

from .notifier import CalendarNotifier, Subscription, Listener
from .cycles import (
    PeriodConfig,
    CycleConfig,
    load_cycle_configs,
    load_cycles,
    default_cycle,
    DEFAULT_CYCLE_NAME,
    DEFAULT_CYCLES_PATH,
)
from .calendar import Calendar

__all__ = [
    "Calendar",
    "CalendarNotifier",
    "Subscription",
    "Listener",
    "PeriodConfig",
    "CycleConfig",
    "load_cycle_configs",
    "load_cycles",
    "default_cycle",
    "DEFAULT_CYCLE_NAME",
    "DEFAULT_CYCLES_PATH",
]
