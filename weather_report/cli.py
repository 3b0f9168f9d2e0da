"""Command-line entrypoint for the weather report job."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from weather_report import config
from weather_report.pipeline import run_pipeline
from utils.logging_utils import setup_logging

USAGE = "Usage: weather-report <file-name> <sender-email> <password> <receiver-email>"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def main(argv: Optional[Sequence[str]] = None, settings: config.Settings | None = None) -> int:
    """
    Run the job from positional arguments and return a process exit status.

    Arguments: input file path (or database URL), sender address, sender
    password, receiver address. Anything after the fourth is ignored.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 4:
        print(USAGE)
        return EXIT_USAGE

    settings = settings or config.settings
    setup_logging(level=settings.log_level, job_name="weather_report")

    source_location, sender, password, receiver = args[:4]
    result = run_pipeline(source_location, sender, password, receiver, settings=settings)
    return EXIT_OK if result.ok else EXIT_FAILED
