"""
Configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The verifier never reads the environment itself: callers pass a
RecaptchaSettings instance, and only default construction falls back to
the environment.
"""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_HOST = "www.google.com"


class RecaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Fallback credential used when the verifier is given no explicit key
    recaptcha_secret_key: str = ""

    # Bare hostname; "www.recaptcha.net" is the usual alternative
    recaptcha_api_host: str = DEFAULT_API_HOST

    recaptcha_timeout_seconds: float = 5.0

    @field_validator("recaptcha_api_host")
    @classmethod
    def _validate_api_host(cls, v: str) -> str:
        host = v.strip()
        if not host:
            return DEFAULT_API_HOST
        if "://" in host or "/" in host:
            raise ValueError("recaptcha_api_host must be a bare hostname")
        # Must survive as the authority of the siteverify URL, port included
        try:
            url = httpx.URL(f"https://{host}/api/siteverify")
        except httpx.InvalidURL as e:
            raise ValueError(f"recaptcha_api_host is not a valid host: {e}") from e
        if (
            not url.host
            or url.userinfo
            or url.query
            or url.fragment
            or url.path != "/api/siteverify"
        ):
            raise ValueError("recaptcha_api_host must be a bare hostname")
        return host

    @field_validator("recaptcha_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("recaptcha_timeout_seconds must be positive")
        return v


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    @property
    def is_production(self) -> bool:
        return self.env == "production"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"

    # Sub-configs (composed via model_validator below)
    recaptcha: Optional[RecaptchaSettings] = None
    logging: Optional[LoggingSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.recaptcha is None:
            self.recaptcha = RecaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
