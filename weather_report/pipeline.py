"""Run orchestration: load, filter, aggregate, write the report, email it.

Every stage failure is turned into a logged, stage-specific message and a
RunOutcome; nothing escapes run_pipeline. A report write failure does not
stop the email attempt, and a failed email leaves the written report on disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from weather_report import config
from weather_report.aggregation import aggregate_observations
from weather_report.data_sources import ObservationSource, build_observation_source
from weather_report.domain import WeatherAggregate
from weather_report.errors import ReportEmailError, ReportWriteError, WeatherReportError
from weather_report.launch_filter import filter_launch_candidates
from weather_report.mailer import send_report_email
from weather_report.report import write_report
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="pipeline")

LOAD_FAILED_MESSAGE = "Failed to load weather data from file."
NO_SUITABLE_DATA_MESSAGE = "No suitable launch date found in weather data."
REPORT_FAILED_MESSAGE = "Failed to generate weather report file."
EMAIL_FAILED_MESSAGE = "Failed to send weather report email."
SUCCESS_MESSAGE = "Weather report sent successfully!"


class RunOutcome(str, Enum):
    """How a pipeline run ended."""
    SUCCESS = "success"
    LOAD_FAILED = "load_failed"
    NO_SUITABLE_DATA = "no_suitable_data"
    EMAIL_FAILED = "email_failed"


@dataclass
class PipelineResult:
    """Outcome of one run plus whatever the completed stages produced."""
    outcome: RunOutcome
    message: str
    loaded_count: int = 0
    suitable_count: int = 0
    aggregate: Optional[WeatherAggregate] = None
    report_path: Optional[Path] = None
    report_written: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome == RunOutcome.SUCCESS


ReportSender = Callable[..., None]


def _load(source_location: str, settings: config.Settings, source: ObservationSource | None):
    if source is None:
        source = build_observation_source(source_location, settings)
    return source.load_observations()


def run_pipeline(
    source_location: str,
    sender: str,
    password: str,
    receiver: str,
    *,
    settings: config.Settings | None = None,
    source: ObservationSource | None = None,
    sender_fn: ReportSender | None = None,
) -> PipelineResult:
    """
    Run the whole report job once.

    `source` overrides the source built from `source_location`, and
    `sender_fn` (same signature as send_report_email) overrides SMTP delivery.
    """
    settings = settings or config.settings
    sender_fn = sender_fn or send_report_email

    # 1. load
    try:
        observations = _load(source_location, settings, source)
    except (WeatherReportError, ValueError) as exc:
        logger.error("%s %s", LOAD_FAILED_MESSAGE, exc)
        return PipelineResult(outcome=RunOutcome.LOAD_FAILED, message=f"{LOAD_FAILED_MESSAGE} {exc}")
    if not observations:
        logger.error("%s The source contained no observations.", LOAD_FAILED_MESSAGE)
        return PipelineResult(outcome=RunOutcome.LOAD_FAILED, message=LOAD_FAILED_MESSAGE)

    # 2. filter
    candidates = filter_launch_candidates(observations)
    logger.info("%d of %d observations suitable for launch", len(candidates), len(observations))
    if not candidates:
        logger.error(NO_SUITABLE_DATA_MESSAGE)
        return PipelineResult(
            outcome=RunOutcome.NO_SUITABLE_DATA,
            message=NO_SUITABLE_DATA_MESSAGE,
            loaded_count=len(observations),
        )

    # 3. aggregate (non-empty by construction)
    aggregate = aggregate_observations(candidates)

    result = PipelineResult(
        outcome=RunOutcome.SUCCESS,
        message=SUCCESS_MESSAGE,
        loaded_count=len(observations),
        suitable_count=len(candidates),
        aggregate=aggregate,
        report_path=Path(settings.report_file_name),
    )

    # 4. write report; a failure here still lets the email stage try
    try:
        write_report(result.report_path, aggregate)
        result.report_written = True
    except ReportWriteError as exc:
        logger.error("%s %s", REPORT_FAILED_MESSAGE, exc)

    # 5. send
    try:
        sender_fn(sender, password, receiver, result.report_path, settings)
    except ReportEmailError as exc:
        logger.error("%s %s", EMAIL_FAILED_MESSAGE, exc)
        result.outcome = RunOutcome.EMAIL_FAILED
        result.message = f"{EMAIL_FAILED_MESSAGE} {exc}"
        return result

    logger.info(SUCCESS_MESSAGE)
    return result
