"""
Verification failures and their FastAPI exception handlers.

ConfigurationError   no secret key, or an unusable endpoint host
ContextError         no inbound request to read the token from
RequestError         siteverify unreachable, timed out or answered non-2xx
ParsingError         siteverify answered something that is not a result

A token Google rejects is not among them: that comes back as a
VerificationResult with success=False, so callers can tell "the user
failed the challenge" from "we could not ask".
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Common base so one handler (or one except clause) covers every failure.

    ``field`` names the setting or input at fault, ``details`` carries
    machine-readable context such as the upstream status code.
    """

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        """JSON body rendered by the AppError handler."""
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(AppError):
    """No usable secret key, or an api host httpx cannot build a URL from."""

    status_code = 500
    error_code = "configuration_error"


class ContextError(AppError):
    """No inbound request was available to read verification inputs from."""

    status_code = 500
    error_code = "context_error"


class RequestError(AppError):
    """The verification endpoint could not be reached or answered non-2xx.

    The underlying httpx exception is kept as ``__cause__``.
    """

    status_code = 502
    error_code = "verification_unavailable"


class ParsingError(AppError):
    """The verification endpoint answered with a body we cannot interpret."""

    status_code = 502
    error_code = "verification_invalid_response"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )
