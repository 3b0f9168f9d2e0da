"""Summary report serialization.

The report is a CSV file with a header row and exactly one data row holding
the twelve aggregate values in a fixed column order.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict

from weather_report.domain import WeatherAggregate
from weather_report.errors import ReportWriteError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="report")

REPORT_COLUMNS = (
    "AverageTemperature",
    "MaxTemperature",
    "MinTemperature",
    "MedianTemperature",
    "AverageWindSpeed",
    "MaxWindSpeed",
    "MinWindSpeed",
    "MedianWindSpeed",
    "AverageHumidity",
    "MaxHumidity",
    "MinHumidity",
    "MedianHumidity",
)


def aggregate_to_row(aggregate: WeatherAggregate) -> Dict[str, float]:
    """Map each report column to its aggregate value."""
    return {
        "AverageTemperature": aggregate.average_temperature,
        "MaxTemperature": aggregate.max_temperature,
        "MinTemperature": aggregate.min_temperature,
        "MedianTemperature": aggregate.median_temperature,
        "AverageWindSpeed": aggregate.average_wind_speed,
        "MaxWindSpeed": aggregate.max_wind_speed,
        "MinWindSpeed": aggregate.min_wind_speed,
        "MedianWindSpeed": aggregate.median_wind_speed,
        "AverageHumidity": aggregate.average_humidity,
        "MaxHumidity": aggregate.max_humidity,
        "MinHumidity": aggregate.min_humidity,
        "MedianHumidity": aggregate.median_humidity,
    }


def write_report(path: str | Path, aggregate: WeatherAggregate) -> Path:
    """Write the one-row summary report, replacing any existing file."""
    report_path = Path(path)
    row = aggregate_to_row(aggregate)
    try:
        with report_path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=REPORT_COLUMNS)
            writer.writeheader()
            writer.writerow({column: repr(row[column]) for column in REPORT_COLUMNS})
    except (OSError, ValueError) as exc:
        # ValueError: path with an embedded NUL byte
        raise ReportWriteError(f"Cannot write {report_path}: {exc}") from exc

    logger.info("Wrote weather report to %s", report_path)
    return report_path
