"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

CAPTCHA settings use the CAPTCHA_ prefix (CAPTCHA_PROVIDER, CAPTCHA_SECRET_KEY,
CAPTCHA_MINIMUM_SCORE, ...) and are frozen once loaded: the validator and the
gate read them on every request and nothing is allowed to change them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemas.models.captcha import CaptchaProvider


class CaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CAPTCHA_", extra="ignore", frozen=True
    )

    provider: CaptchaProvider
    secret_key: str = ""
    minimum_score: float = Field(default=0.5, ge=0.0, le=1.0)
    verify_url: Optional[str] = None
    enabled: bool = True

    # Google reCAPTCHA Enterprise only
    project_id: Optional[str] = None
    api_key: Optional[str] = None

    # Upper bound on the outbound siteverify call
    timeout_seconds: float = Field(default=5.0, gt=0)
    allow_query_token: bool = True

    @property
    def is_enterprise(self) -> bool:
        return self.provider.is_enterprise


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    app_name: str = "captcha-gate"

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    captcha: Optional[CaptchaSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.captcha is None:
            self.captcha = CaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
