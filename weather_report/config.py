"""Job configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration for the weather report job."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_REPORT_", extra="ignore")

    observation_source: str = "auto"  # options: auto, csv, sql
    observation_table: str = "weather_observations"
    report_file_name: str = "WeatherReport.csv"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_use_tls: bool = True
    smtp_timeout_seconds: float = 30.0
    email_subject: str = "Weather Report"
    email_body: str = "Please find the attached weather report."
    log_level: str = "INFO"

    @field_validator("observation_source", mode="after")
    @classmethod
    def normalize_source(cls, v: str) -> str:
        """Accept CSV/Sql/etc. in any case."""
        return v.strip().lower()


settings = Settings()
