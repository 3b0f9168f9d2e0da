"""Launch-suitability filtering of weather observations.

An observation is a launch candidate when it has no rejection reasons under
the given criteria. All string comparisons are case-sensitive exact matches.
"""

from __future__ import annotations

from typing import Iterable

from weather_report.domain import DEFAULT_LAUNCH_CRITERIA, LaunchCriteria, WeatherObservation
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="launch_filter")


def _check_temperature(temperature: float, criteria: LaunchCriteria, reasons: list[str]) -> None:
    # written as "not within" so NaN readings are rejected
    if not criteria.min_temperature <= temperature <= criteria.max_temperature:
        reasons.append(
            f"Temperature {temperature:g} outside {criteria.min_temperature:g}-{criteria.max_temperature:g}"
        )


def _check_wind(wind_speed: float, criteria: LaunchCriteria, reasons: list[str]) -> None:
    if not wind_speed <= criteria.max_wind_speed:
        reasons.append(f"Wind speed {wind_speed:g} above {criteria.max_wind_speed:g}")


def _check_humidity(humidity: float, criteria: LaunchCriteria, reasons: list[str]) -> None:
    if not humidity < criteria.max_humidity_exclusive:
        reasons.append(f"Humidity {humidity:g} not below {criteria.max_humidity_exclusive:g}")


def _check_precipitation(precipitation: int, criteria: LaunchCriteria, reasons: list[str]) -> None:
    if precipitation != criteria.required_precipitation:
        reasons.append(f"Precipitation {precipitation}")


def _check_lightning(lightning: str, criteria: LaunchCriteria, reasons: list[str]) -> None:
    if lightning != criteria.required_lightning:
        reasons.append(f"Lightning {lightning!r}")


def _check_clouds(clouds: str, criteria: LaunchCriteria, reasons: list[str]) -> None:
    if clouds in criteria.excluded_clouds:
        reasons.append(f"Clouds {clouds!r}")


def rejection_reasons(
    observation: WeatherObservation,
    criteria: LaunchCriteria = DEFAULT_LAUNCH_CRITERIA,
) -> list[str]:
    """Return why an observation is unsuitable for launch; empty means it qualifies."""
    reasons: list[str] = []
    _check_temperature(observation.temperature, criteria, reasons)
    _check_wind(observation.wind_speed, criteria, reasons)
    _check_humidity(observation.humidity, criteria, reasons)
    _check_precipitation(observation.precipitation, criteria, reasons)
    _check_lightning(observation.lightning, criteria, reasons)
    _check_clouds(observation.clouds, criteria, reasons)
    return reasons


def is_launch_suitable(
    observation: WeatherObservation,
    criteria: LaunchCriteria = DEFAULT_LAUNCH_CRITERIA,
) -> bool:
    """Return True when the observation meets every launch threshold."""
    return not rejection_reasons(observation, criteria)


def filter_launch_candidates(
    observations: Iterable[WeatherObservation],
    criteria: LaunchCriteria = DEFAULT_LAUNCH_CRITERIA,
) -> list[WeatherObservation]:
    """
    Pure function: keep the observations that meet every launch threshold.

    Relative order is preserved. No match (or no input) yields an empty list,
    which is a valid result; the caller decides whether that ends the run.
    """
    candidates: list[WeatherObservation] = []
    total = 0
    for index, observation in enumerate(observations):
        total += 1
        reasons = rejection_reasons(observation, criteria)
        if reasons:
            logger.debug("Observation %d rejected: %s", index, "; ".join(reasons))
            continue
        candidates.append(observation)

    logger.debug("Kept %d of %d observations as launch candidates", len(candidates), total)
    return candidates
