"""
Request and result shapes of the siteverify call.

VerificationRequest : what we POST (built per call, never stored)
VerificationResult  : what the endpoint answers, parsed from JSON
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError as PydanticValidationError,
    field_validator,
)

from recaptcha_verify.config import DEFAULT_API_HOST
from recaptcha_verify.errors import ParsingError

SITEVERIFY_PATH = "/api/siteverify"


@dataclass(frozen=True)
class VerificationRequest:
    secret_key: str
    response: str
    remote_ip: Optional[str] = None
    use_ssl: bool = True
    api_host: str = DEFAULT_API_HOST

    @property
    def verify_url(self) -> str:
        # Always HTTPS; use_ssl only records how the user reached us
        return f"https://{self.api_host}{SITEVERIFY_PATH}"

    def to_form(self) -> dict[str, str]:
        # remoteip is always sent, empty when the address is unknown
        return {
            "secret": self.secret_key,
            "response": self.response,
            "remoteip": self.remote_ip or "",
        }

    def encode(self) -> str:
        """URL-encoded body, as sent with application/x-www-form-urlencoded."""
        return urlencode(self.to_form())


class VerificationResult(BaseModel):
    """Parsed siteverify answer.

    Only ``success`` is required. ``error-codes`` is empty on success or
    when the endpoint leaves it out; other known fields are optional and
    unknown ones are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    success: StrictBool
    error_codes: list[str] = Field(default_factory=list, alias="error-codes")

    challenge_ts: Optional[str] = None
    hostname: Optional[str] = None
    apk_package_name: Optional[str] = None
    # v3 only
    score: Optional[float] = None
    action: Optional[str] = None

    @field_validator("error_codes", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v

    @classmethod
    def failed(cls) -> "VerificationResult":
        """Negative result produced locally, without asking the endpoint."""
        return cls(success=False)

    @classmethod
    def from_json(cls, body: str) -> "VerificationResult":
        """Parse a response body.

        Raises:
            ParsingError: body is not JSON, not an object, or has no
                boolean ``success``.
        """
        try:
            return cls.model_validate_json(body)
        except PydanticValidationError as e:
            raise ParsingError(
                "Invalid response from the verification endpoint.",
                details=e.errors(
                    include_url=False, include_context=False, include_input=False
                ),
            ) from e
