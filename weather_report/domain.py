"""Domain vocabulary and strict schemas for launch weather reports.

This module defines the value types that flow through the pipeline: a single
weather observation, the launch thresholds it is judged against, and the
summary aggregate written to the report. No filtering or aggregation logic
lives here.
"""

from __future__ import annotations

from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _FrozenStrictModel(BaseModel):
    """Base model: immutable once constructed, unknown fields rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


LIGHTNING_YES = "Yes"
LIGHTNING_NO = "No"


class WeatherObservation(_FrozenStrictModel):
    """One daily weather observation."""
    temperature: float
    wind_speed: float
    humidity: float  # percent; range is not validated
    precipitation: int  # 0 means none, unit unspecified by the data provider
    lightning: str  # "Yes" / "No", compared exactly
    clouds: str


class LaunchCriteria(_FrozenStrictModel):
    """Thresholds an observation must meet to count as a launch candidate."""
    min_temperature: float = 2.0
    max_temperature: float = 31.0
    max_wind_speed: float = 10.0
    max_humidity_exclusive: float = 60.0
    required_precipitation: int = 0
    required_lightning: str = LIGHTNING_NO
    excluded_clouds: FrozenSet[str] = Field(default_factory=lambda: frozenset({"Cumulus", "Nimbus"}))

    @model_validator(mode="after")
    def _check_temperature_band(self) -> "LaunchCriteria":
        if self.min_temperature > self.max_temperature:
            raise ValueError("min_temperature must not exceed max_temperature")
        return self


DEFAULT_LAUNCH_CRITERIA = LaunchCriteria()


class WeatherAggregate(_FrozenStrictModel):
    """Summary statistics over the launch candidates, one report row."""
    average_temperature: float
    max_temperature: float
    min_temperature: float
    median_temperature: float
    average_wind_speed: float
    max_wind_speed: float
    min_wind_speed: float
    median_wind_speed: float
    average_humidity: float
    max_humidity: float
    min_humidity: float
    median_humidity: float


# Fields summarized by the aggregator, in report order.
SUMMARIZED_FIELDS: tuple[str, ...] = ("temperature", "wind_speed", "humidity")
