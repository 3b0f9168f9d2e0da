"""Comma-separated observation files.

The header row is required and column names must match exactly:

    Temperature,WindSpeed,Humidity,Precipitation,Lightning,Clouds

Columns are parsed one by one; extra columns are ignored.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Mapping

from pydantic import ValidationError

from weather_report.data_sources.base import ObservationSource
from weather_report.domain import WeatherObservation
from weather_report.errors import ObservationLoadError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/csv")

TEMPERATURE_COLUMN = "Temperature"
WIND_SPEED_COLUMN = "WindSpeed"
HUMIDITY_COLUMN = "Humidity"
PRECIPITATION_COLUMN = "Precipitation"
LIGHTNING_COLUMN = "Lightning"
CLOUDS_COLUMN = "Clouds"

OBSERVATION_COLUMNS = (
    TEMPERATURE_COLUMN,
    WIND_SPEED_COLUMN,
    HUMIDITY_COLUMN,
    PRECIPITATION_COLUMN,
    LIGHTNING_COLUMN,
    CLOUDS_COLUMN,
)


def _cell(row: Mapping[str, str | None], column: str) -> str:
    """Return a raw cell, failing when the row is too short to have it."""
    value = row.get(column)
    if value is None:
        raise ValueError(f"missing value for column '{column}'")
    return value


def _parse_float(row: Mapping[str, str | None], column: str) -> float:
    raw = _cell(row, column).strip()
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"column '{column}' expects a number, got {raw!r}") from None


def _parse_int(row: Mapping[str, str | None], column: str) -> int:
    raw = _cell(row, column).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"column '{column}' expects an integer, got {raw!r}") from None


def parse_observation_row(row: Mapping[str, str | None]) -> WeatherObservation:
    """Build one observation from a header-keyed CSV row.

    Text columns are kept verbatim (no trimming or case folding) since the
    launch filter compares them exactly.
    """
    return WeatherObservation(
        temperature=_parse_float(row, TEMPERATURE_COLUMN),
        wind_speed=_parse_float(row, WIND_SPEED_COLUMN),
        humidity=_parse_float(row, HUMIDITY_COLUMN),
        precipitation=_parse_int(row, PRECIPITATION_COLUMN),
        lightning=_cell(row, LIGHTNING_COLUMN),
        clouds=_cell(row, CLOUDS_COLUMN),
    )


class CsvObservationSource(ObservationSource):
    """Read observations from a delimited text file with a header row."""

    def __init__(self, path: str | Path, *, delimiter: str = ",", encoding: str = "utf-8-sig") -> None:
        """Bind to a file path; nothing is read until load_observations()."""
        self.path = Path(path)
        self.delimiter = delimiter
        self.encoding = encoding

    def load_observations(self) -> List[WeatherObservation]:
        """Parse the whole file, raising ObservationLoadError on the first bad row."""
        try:
            with self.path.open(newline="", encoding=self.encoding) as fh:
                reader = csv.DictReader(fh, delimiter=self.delimiter)
                header = reader.fieldnames
                if not header:
                    raise ObservationLoadError(f"{self.path}: missing header row")
                missing = [c for c in OBSERVATION_COLUMNS if c not in header]
                if missing:
                    raise ObservationLoadError(
                        f"{self.path}: missing column(s) {', '.join(missing)}"
                    )

                observations: List[WeatherObservation] = []
                for row in reader:
                    try:
                        observations.append(parse_observation_row(row))
                    except (ValueError, ValidationError) as exc:
                        # line_num counts the header, so it is the 1-based file line
                        raise ObservationLoadError(
                            f"{self.path}: line {reader.line_num}: {exc}"
                        ) from exc
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise ObservationLoadError(f"{self.path}: {exc}") from exc

        logger.info("Loaded %d observations from %s", len(observations), self.path)
        return observations
