"""Derived values cached by the calendar.

The snapshot is replaced or cleared as a whole, never edited field by field,
so the season, moon phase and sidereal hour always describe the same day.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .types import MoonPhase, Season


class DerivedSnapshot(BaseModel):
    """Season, moon phase and sidereal hour for one civil day."""

    model_config = ConfigDict(frozen=True)

    year: int
    day_of_year: int
    season: Season
    moon_phase: MoonPhase
    sidereal_hour: float

    @property
    def key(self) -> tuple[int, int]:
        """The (day_of_year, year) this snapshot is valid for."""
        return (self.day_of_year, self.year)

    def is_valid_for(self, key: tuple[int, int]) -> bool:
        return self.key == key


def invalidate_if_day_changed(
    snapshot: DerivedSnapshot | None,
    new_key: tuple[int, int],
) -> DerivedSnapshot | None:
    """Keep the snapshot only if it still describes the new day."""
    if snapshot is not None and snapshot.is_valid_for(new_key):
        return snapshot
    return None


def reset_snapshot(snapshot: DerivedSnapshot | None) -> None:
    """Discard the snapshot whatever day it describes.

    Used when the zone changes: the day key may be unchanged while local
    midnight, and with it the sidereal hour, has moved.
    """
    return None
