"""Email delivery of the weather report over SMTP."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage
from pathlib import Path

from weather_report import config
from weather_report.errors import ReportEmailError
from utils.logging_utils import get_tagged_logger, mask_email

logger = get_tagged_logger(__name__, tag="mailer")

# Swapped out in tests.
SMTP_CLASS = smtplib.SMTP


def build_report_message(
    sender: str,
    receiver: str,
    report_path: str | Path,
    *,
    subject: str,
    body: str,
) -> EmailMessage:
    """Build the report email with the CSV file attached."""
    path = Path(report_path)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise ReportEmailError(f"Cannot attach {path}: {exc}") from exc

    message = EmailMessage()
    try:
        message["From"] = sender
        message["To"] = receiver
        message["Subject"] = subject
    except ValueError as exc:
        # header values with CR/LF or unparsable addresses
        raise ReportEmailError(f"Invalid email header: {exc}") from exc
    message.set_content(body)
    message.add_attachment(payload, maintype="text", subtype="csv", filename=path.name)
    return message


def send_report_email(
    sender: str,
    password: str,
    receiver: str,
    report_path: str | Path,
    settings: config.Settings | None = None,
) -> None:
    """
    Send the report as an attachment, authenticating as the sender.

    Raises ReportEmailError on any attachment, connection, TLS, login or
    delivery failure. The password is never logged.
    """
    settings = settings or config.settings
    message = build_report_message(
        sender,
        receiver,
        report_path,
        subject=settings.email_subject,
        body=settings.email_body,
    )

    logger.info(
        "Sending weather report to %s via %s:%d",
        mask_email(receiver),
        settings.smtp_host,
        settings.smtp_port,
    )
    try:
        with SMTP_CLASS(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds) as client:
            if settings.smtp_use_tls:
                client.starttls()
            client.login(sender, password)
            client.send_message(message)
    except (smtplib.SMTPException, OSError, ValueError) as exc:
        # ValueError covers UnicodeEncodeError from AUTH with a non-ASCII password
        raise ReportEmailError(f"SMTP delivery via {settings.smtp_host} failed: {exc}") from exc
