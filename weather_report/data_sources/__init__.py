"""Observation sources: CSV files and SQL tables behind one interface."""

from .base import CallableObservationSource, ObservationSource
from .csv_source import OBSERVATION_COLUMNS, CsvObservationSource, parse_observation_row
from .factory import build_observation_source
from .sql_source import SqlObservationSource

__all__ = [
    "build_observation_source",
    "CallableObservationSource",
    "CsvObservationSource",
    "ObservationSource",
    "OBSERVATION_COLUMNS",
    "parse_observation_row",
    "SqlObservationSource",
]
