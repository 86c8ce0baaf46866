"""Application configuration."""

import os
import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fresh_tracker.services.notifications import DIGEST_SUBJECT

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    smtp_host: str = "smtp.qq.com"
    smtp_port: int = 465
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_ssl: bool = True
    email_sender: str | None = None
    email_subject: str = DIGEST_SUBJECT
    sweep_time: str = "09:00"
    scheduler_enabled: bool = True
    scheduler_poll_seconds: float = 30.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("sweep_time")
    @classmethod
    def _check_sweep_time(cls, value: str) -> str:
        if not _TIME_OF_DAY.match(value):
            raise ValueError("sweep_time must use HH:MM 24-hour format")
        return value

    @property
    def resolved_sender(self) -> str:
        """Return the From address, falling back to the SMTP username."""
        return self.email_sender or self.smtp_username or "noreply@localhost"
