"""Calendar change events.

Events are immutable and carry a ``type`` discriminator so the union
round-trips through pydantic.
"""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator

from .types import PeriodId

EventKind = Literal["date_change", "period_change", "time_warp"]


class DateChangedEvent(BaseModel):
    """The calendar's current time moved."""
    model_config = ConfigDict(frozen=True)
    type: Literal["date_change"] = "date_change"
    timestamp: datetime

    previous: datetime


class PeriodChangedEvent(BaseModel):
    """The period owning the current hour changed."""
    model_config = ConfigDict(frozen=True)
    type: Literal["period_change"] = "period_change"
    timestamp: datetime

    old_period: PeriodId | None
    new_period: PeriodId | None


class TimeWarpEvent(BaseModel):
    """The current time jumped rather than advanced."""
    model_config = ConfigDict(frozen=True)
    type: Literal["time_warp"] = "time_warp"
    timestamp: datetime

    previous: datetime


# --- The discriminated union ---

CalendarEvent = Annotated[
    Union[
        DateChangedEvent,
        PeriodChangedEvent,
        TimeWarpEvent,
    ],
    Discriminator("type"),
]
