"""
Verification inputs taken from an inbound request.

RecaptchaRequestContext carries the three values the verifier needs from
the web request: the widget's token, the caller's address and whether the
request arrived over HTTPS. Build it explicitly, or with ``from_request``
inside a FastAPI/Starlette handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from recaptcha_verify.errors import ContextError
from recaptcha_verify.shared.ip_utils import get_client_ip

# Form field the reCAPTCHA widget posts its token in
RESPONSE_FIELD = "g-recaptcha-response"


@dataclass(frozen=True)
class RecaptchaRequestContext:
    response: Optional[str] = None
    remote_ip: Optional[str] = None
    # Informational: the siteverify call is HTTPS regardless
    use_ssl: bool = True

    @property
    def has_response(self) -> bool:
        return bool(self.response)

    @classmethod
    async def from_request(
        cls,
        request: Optional[Request],
        *,
        field_name: str = RESPONSE_FIELD,
        trust_proxy_headers: bool = True,
    ) -> "RecaptchaRequestContext":
        """Read the token, client address and scheme from ``request``.

        Raises:
            ContextError: ``request`` is None.
        """
        if request is None:
            raise ContextError("Http request context does not exist.")

        form = await request.form()
        token = form.get(field_name)
        if not isinstance(token, str):
            # Missing field, or an upload posted under the same name
            token = None

        return cls(
            response=token,
            remote_ip=get_client_ip(
                request, trust_proxy_headers=trust_proxy_headers
            ),
            use_ssl=request.url.scheme == "https",
        )
