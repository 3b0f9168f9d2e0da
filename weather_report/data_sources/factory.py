"""Factory helpers for choosing an observation source at startup."""

from __future__ import annotations

import re

from weather_report import config
from weather_report.data_sources.base import ObservationSource
from weather_report.data_sources.csv_source import CsvObservationSource
from utils.logging_utils import get_tagged_logger, mask_db_url

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "auto"

_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def looks_like_database_url(location: str) -> bool:
    """Return True for strings such as sqlite:///obs.db or postgresql://host/db."""
    return bool(_URL_RE.match(location or ""))


def build_observation_source(location: str, settings: config.Settings | None = None) -> ObservationSource:
    """Instantiate the observation source for a file path or database URL."""
    settings = settings or config.settings
    source = (settings.observation_source or DEFAULT_SOURCE_NAME).lower()

    if source == "auto":
        source = "sql" if looks_like_database_url(location) else "csv"

    if source == "csv":
        logger.info("Using CSV observation source: %s", location)
        return CsvObservationSource(location)

    if source == "sql":
        from .sql_source import SqlObservationSource

        if not location:
            raise ValueError("a database URL is required for the SQL observation source")
        logger.info(
            "Using SQL observation source %s (table %s)",
            mask_db_url(location),
            settings.observation_table,
        )
        return SqlObservationSource.from_url(location, table=settings.observation_table)

    raise ValueError(f"Unknown observation source '{source}'")
