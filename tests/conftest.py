import httpx
import pytest

from recaptcha_verify.config import RecaptchaSettings
from recaptcha_verify.infrastructure.http_client import HttpClient, SyncHttpClient


class FakeSiteverify:
    """Stands in for the siteverify endpoint behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = '{"success": true}'
        self.error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    def answer(self, body: str, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code


@pytest.fixture
def siteverify():
    return FakeSiteverify()


@pytest.fixture
def sync_http(siteverify):
    with SyncHttpClient(transport=httpx.MockTransport(siteverify)) as client:
        yield client


@pytest.fixture
async def async_http(siteverify):
    async with HttpClient(transport=httpx.MockTransport(siteverify)) as client:
        yield client


@pytest.fixture
def settings():
    return RecaptchaSettings(
        recaptcha_secret_key="",
        recaptcha_api_host="www.google.com",
        recaptcha_timeout_seconds=5.0,
    )
