"""Interfaces and helpers for observation data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol

from weather_report.domain import WeatherObservation


class ObservationSource(Protocol):
    """Interface for anything that can provide daily weather observations."""

    def load_observations(self) -> List[WeatherObservation]:
        """Return every observation in source order, raising ObservationLoadError on failure."""
        ...


@dataclass
class CallableObservationSource(ObservationSource):
    """Wrap a zero-argument callable so tests and scripts can inject observations."""

    loader: Callable[[], List[WeatherObservation]]

    def load_observations(self) -> List[WeatherObservation]:
        """Delegate to the configured loader."""
        return list(self.loader())
