"""
FastAPI dependency providers.

Used with FastAPI's Depends() system. Settings are expected on
``app.state.settings``; an optional shared ``app.state.http_client`` is
reused for async verification.
"""

from __future__ import annotations

from fastapi import Depends, Request

from recaptcha_verify.config import AppSettings
from recaptcha_verify.infrastructure.captcha.protocol import CaptchaVerifier
from recaptcha_verify.infrastructure.captcha.recaptcha import RecaptchaVerifier
from recaptcha_verify.shared.request_context import RecaptchaRequestContext


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_request_context(request: Request) -> RecaptchaRequestContext:
    """Read the widget token, client IP and scheme of the current request."""
    return await RecaptchaRequestContext.from_request(request)


async def get_captcha_verifier(
    request: Request,
    settings: AppSettings = Depends(get_settings),
    context: RecaptchaRequestContext = Depends(get_request_context),
) -> CaptchaVerifier:
    """Return a verifier bound to the current request."""
    return RecaptchaVerifier(
        context,
        settings.recaptcha,
        http_client=getattr(request.app.state, "http_client", None),
    )
