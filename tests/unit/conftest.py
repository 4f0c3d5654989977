"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests, and clears RECAPTCHA_* variables so tests control config
exclusively through monkeypatch.setenv().
"""

import pytest

from recaptcha_verify.config import RecaptchaSettings


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture(autouse=True)
def clean_recaptcha_env(monkeypatch):
    for var in (
        "RECAPTCHA_SECRET_KEY",
        "RECAPTCHA_API_HOST",
        "RECAPTCHA_TIMEOUT_SECONDS",
        "ENV",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings():
    return RecaptchaSettings()

