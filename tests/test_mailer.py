import smtplib

import pytest

from weather_report import mailer
from weather_report.config import Settings
from weather_report.data_sources.base import CallableObservationSource
from weather_report.domain import WeatherObservation
from weather_report.errors import ReportEmailError
from weather_report.pipeline import RunOutcome, run_pipeline


class FakeSMTP:
    instances = []
    fail_on = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls = []
        self.closed = False
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def _record(self, name, *args):
        self.calls.append((name, args))
        if FakeSMTP.fail_on == name:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def starttls(self):
        self._record("starttls")

    def login(self, user, password):
        self._record("login", user, password)
        # smtplib ASCII-encodes the AUTH PLAIN payload
        ("\0" + user + "\0" + password).encode("ascii")

    def send_message(self, message):
        self._record("send_message", message)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_on = None
    monkeypatch.setattr(mailer, "SMTP_CLASS", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def report_file(tmp_path):
    path = tmp_path / "WeatherReport.csv"
    path.write_text("AverageTemperature\n15.0\n", encoding="utf-8")
    return path


def test_build_report_message_attaches_csv(report_file):
    msg = mailer.build_report_message("a@example.com", "b@example.com", report_file,
                                      subject="Weather Report", body="Please find the attached weather report.")
    assert msg["Subject"] == "Weather Report"
    assert msg["From"] == "a@example.com"
    assert msg["To"] == "b@example.com"
    attachments = list(msg.iter_attachments())
    assert len(attachments) == 1
    assert attachments[0].get_filename() == "WeatherReport.csv"
    assert attachments[0].get_content_type() == "text/csv"
    assert "Please find the attached weather report." in msg.get_body(("plain",)).get_content()


def test_missing_attachment_raises(tmp_path):
    with pytest.raises(ReportEmailError):
        mailer.build_report_message("a@x", "b@x", tmp_path / "nope.csv", subject="s", body="b")


def test_send_uses_starttls_and_login(fake_smtp, report_file):
    mailer.send_report_email("a@example.com", "s3cret", "b@example.com", report_file, Settings())
    (client,) = fake_smtp.instances
    assert (client.host, client.port) == ("smtp.gmail.com", 587)
    assert [name for name, _ in client.calls] == ["starttls", "login", "send_message"]
    assert client.calls[1][1] == ("a@example.com", "s3cret")
    assert client.closed


def test_tls_can_be_disabled(fake_smtp, report_file):
    settings = Settings(smtp_host="localhost", smtp_port=1025, smtp_use_tls=False)
    mailer.send_report_email("a@example.com", "pw", "b@example.com", report_file, settings)
    (client,) = fake_smtp.instances
    assert client.host == "localhost"
    assert [name for name, _ in client.calls] == ["login", "send_message"]


def test_smtp_failure_is_wrapped_and_connection_closed(fake_smtp, report_file):
    fake_smtp.fail_on = "login"
    with pytest.raises(ReportEmailError):
        mailer.send_report_email("a@example.com", "pw", "b@example.com", report_file, Settings())
    assert fake_smtp.instances[0].closed


def test_connection_error_is_wrapped(monkeypatch, report_file):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(mailer, "SMTP_CLASS", refuse)
    with pytest.raises(ReportEmailError, match="refused"):
        mailer.send_report_email("a@example.com", "pw", "b@example.com", report_file, Settings())


def test_password_never_logged(fake_smtp, report_file, caplog):
    caplog.set_level("DEBUG")
    mailer.send_report_email("a@example.com", "hunter2-secret", "b@example.com", report_file, Settings())
    assert "hunter2-secret" not in caplog.text


def test_header_injection_in_receiver_is_rejected(report_file):
    with pytest.raises(ReportEmailError, match="header"):
        mailer.build_report_message("a@example.com", "b@example.com\nBcc: evil@example.com", report_file,
                                    subject="s", body="b")


def test_non_ascii_password_is_wrapped(fake_smtp, report_file):
    with pytest.raises(ReportEmailError):
        mailer.send_report_email("a@example.com", "pässwort", "b@example.com", report_file, Settings())
    assert fake_smtp.instances[0].closed


@pytest.mark.parametrize(
    "password, receiver",
    [("pässwort", "b@example.com"), ("pw", "b@example.com\nBcc: evil@example.com")],
)
def test_bad_credentials_or_addresses_end_run_as_email_failure(fake_smtp, tmp_path, password, receiver):
    settings = Settings(report_file_name=str(tmp_path / "WeatherReport.csv"), smtp_use_tls=False)
    observation = WeatherObservation(temperature=10.0, wind_speed=5.0, humidity=40.0, precipitation=0,
                                     lightning="No", clouds="Clear")
    source = CallableObservationSource(loader=lambda: [observation])
    result = run_pipeline("unused.csv", "a@example.com", password, receiver, settings=settings, source=source)
    assert result.outcome == RunOutcome.EMAIL_FAILED
    assert result.message.startswith("Failed to send weather report email.")
    assert (tmp_path / "WeatherReport.csv").exists()
