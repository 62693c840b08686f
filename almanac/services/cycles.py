"""Daily cycle configuration.

Cycles are declared in YAML and validated with pydantic before being built
into DailyCycle instances. Every call builds fresh cycles, so callers never
share a mutable cycle unless they pass one around themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from almanac.domain import (
    CalendarError,
    DailyCycle,
    InvalidArgumentError,
    Period,
    PeriodId,
)

logger = logging.getLogger(__name__)

DEFAULT_CYCLES_PATH = Path(__file__).parent.parent / "config" / "cycles.yaml"
DEFAULT_CYCLE_NAME = "default"


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------


class PeriodConfig(BaseModel):
    """One period entry in a cycle definition."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    hour: int = Field(ge=0, le=23)

    def to_period(self) -> Period:
        return Period(id=PeriodId(self.id), name=self.name, start_hour=self.hour)


class CycleConfig(BaseModel):
    """A named cycle definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    periods: tuple[PeriodConfig, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CycleConfig:
        """Create from a YAML mapping, raising InvalidArgumentError on bad data."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            name = data.get("name", "?") if isinstance(data, dict) else "?"
            raise InvalidArgumentError(f"Invalid cycle definition {name!r}: {e}") from e

    def build(self) -> DailyCycle:
        """Build a DailyCycle holding these periods."""
        cycle = DailyCycle(name=self.name)
        for entry in self.periods:
            try:
                cycle.add_period(entry.to_period())
            except CalendarError as e:
                raise InvalidArgumentError(f"Invalid cycle definition {self.name!r}: {e}") from e
        return cycle


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------


def load_cycle_configs(path: Path | None = None) -> dict[str, CycleConfig]:
    """Read cycle definitions from a YAML file.

    Args:
        path: YAML file to read. If None, uses the packaged cycles.yaml.

    Returns:
        Cycle configs by name; empty if the file does not exist
    """
    if path is None:
        path = DEFAULT_CYCLES_PATH
    if not path.exists():
        logger.warning(f"Cycle file not found: {path}")
        return {}

    with open(path) as f:
        data = yaml.safe_load(f)

    if not data or "cycles" not in data:
        return {}

    configs: dict[str, CycleConfig] = {}
    for entry in data["cycles"]:
        config = CycleConfig.from_dict(entry)
        if config.name in configs:
            raise InvalidArgumentError(f"Cycle {config.name!r} defined twice in {path}")
        configs[config.name] = config

    logger.debug(f"Loaded {len(configs)} cycle definitions from {path}")
    return configs


def load_cycles(path: Path | None = None) -> dict[str, DailyCycle]:
    """Read cycle definitions and build a DailyCycle for each."""
    return {name: config.build() for name, config in load_cycle_configs(path).items()}


def default_cycle() -> DailyCycle:
    """Build the well-known default cycle from the packaged configuration."""
    configs = load_cycle_configs()
    try:
        return configs[DEFAULT_CYCLE_NAME].build()
    except KeyError:
        raise InvalidArgumentError(
            f"Packaged cycles.yaml has no {DEFAULT_CYCLE_NAME!r} cycle"
        ) from None
