"""Server-side verification of reCAPTCHA challenge responses."""

from recaptcha_verify.config import AppSettings, LoggingSettings, RecaptchaSettings
from recaptcha_verify.errors import (
    AppError,
    ConfigurationError,
    ContextError,
    ParsingError,
    RequestError,
)
from recaptcha_verify.infrastructure.captcha.recaptcha import RecaptchaVerifier
from recaptcha_verify.schemas.verification import (
    VerificationRequest,
    VerificationResult,
)
from recaptcha_verify.shared.logging import setup_logging
from recaptcha_verify.shared.request_context import RecaptchaRequestContext

__all__ = [
    "AppError",
    "AppSettings",
    "ConfigurationError",
    "ContextError",
    "LoggingSettings",
    "ParsingError",
    "RecaptchaRequestContext",
    "RecaptchaSettings",
    "RecaptchaVerifier",
    "RequestError",
    "VerificationRequest",
    "VerificationResult",
    "setup_logging",
]
