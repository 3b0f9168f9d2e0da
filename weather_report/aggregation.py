"""Summary statistics over launch candidates.

Turns a non-empty sequence of observations into a single WeatherAggregate:
mean, max, min and median for temperature, wind speed and humidity.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from weather_report.domain import SUMMARIZED_FIELDS, WeatherAggregate, WeatherObservation
from weather_report.errors import EmptyObservationsError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="aggregation")


def median(values: Iterable[float]) -> float:
    """
    Median of the values, computed on a sorted copy.

    Odd count: the middle element. Even count: the mean of the two middle
    elements (indices n//2 - 1 and n//2).
    """
    ordered = sorted(values)
    count = len(ordered)
    if count == 0:
        raise EmptyObservationsError("cannot take the median of an empty input")

    middle = count // 2
    if count % 2 == 0:
        low, high = ordered[middle - 1], ordered[middle]
        mid = (low + high) / 2
        if math.isinf(mid):
            # the sum overflowed; halve first
            mid = low / 2 + high / 2
        return min(max(mid, low), high)
    return ordered[middle]


def _summarize(values: Sequence[float]) -> tuple[float, float, float, float]:
    """Return (average, max, min, median) for one field."""
    highest = max(values)
    lowest = min(values)
    average = sum(values) / len(values)
    # float rounding in the sum can land a hair outside the observed range
    average = min(max(average, lowest), highest)
    return average, highest, lowest, median(values)


def aggregate_observations(observations: Sequence[WeatherObservation]) -> WeatherAggregate:
    """Pure function: fold a non-empty sequence of observations into one aggregate row."""
    if not observations:
        raise EmptyObservationsError("cannot aggregate an empty input")

    summary: dict[str, float] = {}
    for field in SUMMARIZED_FIELDS:
        values = [float(getattr(obs, field)) for obs in observations]
        average, highest, lowest, mid = _summarize(values)
        summary[f"average_{field}"] = average
        summary[f"max_{field}"] = highest
        summary[f"min_{field}"] = lowest
        summary[f"median_{field}"] = mid

    logger.debug("Aggregated %d observations", len(observations))
    return WeatherAggregate(**summary)
