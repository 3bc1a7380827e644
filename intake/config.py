"""Application configuration and settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the intake service.

    Credentials and connection strings have no defaults, so a missing value
    fails when the settings are built rather than on the first request.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 5002
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"

    database_url: str = Field(..., min_length=1)

    email_user: str = Field(..., min_length=1)
    email_pass: str = Field(..., min_length=1)
    notification_email_to: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_use_tls: bool = True
    smtp_timeout_seconds: float = 30.0

    twilio_account_sid: str = Field(..., min_length=1)
    twilio_auth_token: str = Field(..., min_length=1)
    twilio_whatsapp_number: str = Field(..., min_length=1)
    staff_whatsapp_number: str = Field(..., min_length=1)

    @property
    def email_recipient(self) -> str:
        return self.notification_email_to or self.email_user


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
