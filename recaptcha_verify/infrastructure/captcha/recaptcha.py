"""reCAPTCHA implementation of CaptchaVerifier.

- token, client address and scheme come from an explicit RecaptchaRequestContext
- secret key: explicit argument first, RecaptchaSettings as fallback
- default timeout from settings, overridable per call
- transport failures raise RequestError, unreadable bodies ParsingError,
  an unusable endpoint URL ConfigurationError;
  a "no" from Google is returned as a VerificationResult
"""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Optional

import httpx

from recaptcha_verify.config import RecaptchaSettings
from recaptcha_verify.errors import (
    ConfigurationError,
    ContextError,
    ParsingError,
    RequestError,
)
from recaptcha_verify.infrastructure.http_client import HttpClient, SyncHttpClient
from recaptcha_verify.schemas.verification import (
    VerificationRequest,
    VerificationResult,
)
from recaptcha_verify.shared.logging import get_logger, hash_ip
from recaptcha_verify.shared.request_context import RecaptchaRequestContext

log = get_logger(__name__)


class RecaptchaVerifier:
    def __init__(
        self,
        context: Optional[RecaptchaRequestContext],
        settings: Optional[RecaptchaSettings] = None,
        *,
        secret_key: str = "",
        http_client: Optional[HttpClient] = None,
        sync_http_client: Optional[SyncHttpClient] = None,
    ) -> None:
        if context is None:
            raise ContextError("Http request context does not exist.")

        self._settings = settings or RecaptchaSettings()
        self._secret_key = secret_key or self._settings.recaptcha_secret_key
        if not self._secret_key:
            raise ConfigurationError(
                "Secret key cannot be null or empty.", field="recaptcha_secret_key"
            )

        self._context = context
        self._http = http_client
        self._sync_http = sync_http_client

    @property
    def context(self) -> RecaptchaRequestContext:
        return self._context

    @property
    def secret_key(self) -> str:
        return self._secret_key

    @property
    def request(self) -> VerificationRequest:
        return VerificationRequest(
            secret_key=self._secret_key,
            response=self._context.response or "",
            remote_ip=self._context.remote_ip,
            use_ssl=self._context.use_ssl,
            api_host=self._settings.recaptcha_api_host,
        )

    def verify(self, timeout: Optional[float] = None) -> VerificationResult:
        """Check the user's token against siteverify, blocking."""
        if not self._context.has_response:
            log.info("recaptcha_response_missing")
            return VerificationResult.failed()

        request = self.request
        try:
            with self._sync_client() as http:
                response = http.post(
                    request.verify_url, **self._post_kwargs(request, timeout)
                )
                response.raise_for_status()
                body = response.text
        except httpx.InvalidURL as e:
            raise self._url_error(request, e) from e
        except httpx.HTTPError as e:
            raise self._request_error(request, e) from e

        return self._parse(request, body)

    async def verify_async(self, timeout: Optional[float] = None) -> VerificationResult:
        """Check the user's token against siteverify without blocking."""
        if not self._context.has_response:
            log.info("recaptcha_response_missing")
            return VerificationResult.failed()

        request = self.request
        try:
            async with self._async_client() as http:
                response = await http.post(
                    request.verify_url, **self._post_kwargs(request, timeout)
                )
                response.raise_for_status()
                body = response.text
        except httpx.InvalidURL as e:
            raise self._url_error(request, e) from e
        except httpx.HTTPError as e:
            raise self._request_error(request, e) from e

        return self._parse(request, body)

    # Injected clients are shared and stay open; our own are closed per call
    def _sync_client(self):
        if self._sync_http is not None:
            return nullcontext(self._sync_http)
        return SyncHttpClient(timeout=self._settings.recaptcha_timeout_seconds)

    def _async_client(self):
        if self._http is not None:
            return nullcontext(self._http)
        return HttpClient(timeout=self._settings.recaptcha_timeout_seconds)

    @staticmethod
    def _post_kwargs(
        request: VerificationRequest, timeout: Optional[float]
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "data": request.to_form(),
            "headers": {"Content-Type": "application/x-www-form-urlencoded"},
        }
        if timeout is not None:
            kwargs["timeout"] = timeout
        return kwargs

    @staticmethod
    def _url_error(
        request: VerificationRequest, e: httpx.InvalidURL
    ) -> ConfigurationError:
        log.error("recaptcha_api_host_invalid", url=request.verify_url, error=str(e))
        return ConfigurationError(
            "Verification endpoint URL is invalid.", field="recaptcha_api_host"
        )

    @staticmethod
    def _request_error(request: VerificationRequest, e: httpx.HTTPError) -> RequestError:
        status_code = None
        if isinstance(e, httpx.HTTPStatusError):
            status_code = e.response.status_code
        log.error(
            "recaptcha_request_failed",
            url=request.verify_url,
            status_code=status_code,
            error=str(e),
            error_type=type(e).__name__,
        )
        return RequestError(
            "Could not reach the verification endpoint.",
            details={"error_type": type(e).__name__, "status_code": status_code},
        )

    @staticmethod
    def _parse(request: VerificationRequest, body: str) -> VerificationResult:
        try:
            result = VerificationResult.from_json(body)
        except ParsingError:
            log.error("recaptcha_response_unparseable", response_text=body[:200])
            raise

        if result.success:
            log.info(
                "recaptcha_verification_succeeded",
                hostname=result.hostname,
                remote_ip=hash_ip(request.remote_ip),
            )
        else:
            log.warning(
                "recaptcha_verification_failed",
                error_codes=result.error_codes,
                remote_ip=hash_ip(request.remote_ip),
            )
        return result
