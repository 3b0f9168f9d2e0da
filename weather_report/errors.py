"""Exceptions raised by the weather report stages.

Library functions raise these; only the pipeline turns them into log
messages and run outcomes.
"""


class WeatherReportError(Exception):
    """Base class for every failure the pipeline knows how to report."""


class ObservationLoadError(WeatherReportError):
    """Observations could not be read or parsed."""


class EmptyObservationsError(WeatherReportError, ValueError):
    """An aggregate was requested over zero observations."""


class ReportWriteError(WeatherReportError):
    """The summary report file could not be written."""


class ReportEmailError(WeatherReportError):
    """The report email could not be built or delivered."""
