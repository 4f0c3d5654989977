"""CaptchaVerifier protocol: callers depend on this, not the concrete implementation."""

from typing import Optional, Protocol

from recaptcha_verify.schemas.verification import VerificationResult


class CaptchaVerifier(Protocol):
    def verify(self, timeout: Optional[float] = None) -> VerificationResult: ...

    async def verify_async(
        self, timeout: Optional[float] = None
    ) -> VerificationResult: ...
