"""SQL-backed observation source.

Reads the same six fields as the CSV loader from a table whose columns use
the snake_case field names (temperature, wind_speed, humidity, precipitation,
lightning, clouds). Works with any SQLAlchemy URL; tests use in-memory SQLite.
"""

from __future__ import annotations

import re
from typing import List, Mapping

from pydantic import ValidationError
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from weather_report.data_sources.base import ObservationSource
from weather_report.domain import WeatherObservation
from weather_report.errors import ObservationLoadError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/sql")

# table or schema.table, interpolated into SQL so kept to plain identifiers
_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _row_to_observation(row: Mapping) -> WeatherObservation:
    """Map a result row onto an observation, column by column."""
    return WeatherObservation(
        temperature=row["temperature"],
        wind_speed=row["wind_speed"],
        humidity=row["humidity"],
        precipitation=row["precipitation"],
        lightning=row["lightning"],
        clouds=row["clouds"],
    )


class SqlObservationSource(ObservationSource):
    """Fetch observations from a database table instead of a CSV file."""

    DEFAULT_TABLE = "weather_observations"

    def __init__(self, engine: Engine, *, table: str = DEFAULT_TABLE) -> None:
        """Bind to a database engine and validate the table name."""
        if not _TABLE_NAME_RE.match(table or ""):
            raise ValueError(f"Invalid observation table name {table!r}")
        self.engine = engine
        self.table = table

    @classmethod
    def from_url(cls, database_url: str, **kwargs) -> "SqlObservationSource":
        """Create an engine from a URL and build the data source."""
        try:
            engine = create_engine(database_url, future=True)
        except (SQLAlchemyError, ImportError) as exc:
            # bad URL or missing DB driver
            raise ObservationLoadError(f"Cannot open observation database: {exc}") from exc
        return cls(engine, **kwargs)

    def load_observations(self) -> List[WeatherObservation]:
        """Select every row of the table, raising ObservationLoadError on failure."""
        query = text(
            "SELECT temperature, wind_speed, humidity, precipitation, lightning, clouds "
            f"FROM {self.table}"
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            raise ObservationLoadError(f"Query against {self.table} failed: {exc}") from exc

        observations: List[WeatherObservation] = []
        for index, row in enumerate(rows):
            try:
                observations.append(_row_to_observation(row))
            except ValidationError as exc:
                raise ObservationLoadError(f"{self.table}: row {index + 1}: {exc}") from exc

        logger.info("Loaded %d observations from table %s", len(observations), self.table)
        return observations
