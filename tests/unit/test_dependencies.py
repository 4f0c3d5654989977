"""Unit tests for the FastAPI dependency providers."""

import httpx
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from recaptcha_verify.config import AppSettings, RecaptchaSettings
from recaptcha_verify.dependencies import get_captcha_verifier, get_settings
from recaptcha_verify.errors import register_error_handlers
from recaptcha_verify.infrastructure.http_client import HttpClient
from recaptcha_verify.shared.request_context import RESPONSE_FIELD


def _app(handler, secret="app-secret") -> tuple[FastAPI, list]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    app = FastAPI()
    register_error_handlers(app)
    app.state.settings = AppSettings(
        recaptcha=RecaptchaSettings(recaptcha_secret_key=secret)
    )
    app.state.http_client = HttpClient(transport=httpx.MockTransport(record))

    @app.post("/signup")
    async def signup(verifier=Depends(get_captcha_verifier)):
        result = await verifier.verify_async()
        return {"success": result.success, "error_codes": result.error_codes}

    @app.get("/settings")
    async def settings(settings=Depends(get_settings)):
        return {"api_host": settings.recaptcha.recaptcha_api_host}

    return app, seen


def test_get_settings_returns_app_state():
    app, _ = _app(lambda r: httpx.Response(200, json={"success": True}))
    resp = TestClient(app).get("/settings")
    assert resp.json() == {"api_host": "www.google.com"}


def test_verifier_uses_request_and_shared_client():
    app, seen = _app(lambda r: httpx.Response(200, json={"success": True}))
    resp = TestClient(app).post(
        "/signup",
        data={RESPONSE_FIELD: "user-token"},
        headers={"X-Real-IP": "198.51.100.7"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "error_codes": []}
    assert len(seen) == 1
    assert seen[0].content == (
        b"secret=app-secret&response=user-token&remoteip=198.51.100.7"
    )


def test_missing_token_never_reaches_endpoint():
    app, seen = _app(lambda r: httpx.Response(200, json={"success": True}))
    resp = TestClient(app).post("/signup", data={"email": "a@b.c"})
    assert resp.json() == {"success": False, "error_codes": []}
    assert seen == []


def test_missing_secret_surfaces_as_configuration_error():
    app, seen = _app(lambda r: httpx.Response(200, json={"success": True}), secret="")
    resp = TestClient(app).post("/signup", data={RESPONSE_FIELD: "t"})
    assert resp.status_code == 500
    assert resp.json()["code"] == "configuration_error"
    assert seen == []


def test_unreachable_endpoint_surfaces_as_502():
    def fail(request):
        raise httpx.ConnectError("refused", request=request)

    app, _ = _app(fail)
    resp = TestClient(app).post("/signup", data={RESPONSE_FIELD: "t"})
    assert resp.status_code == 502
    assert resp.json()["code"] == "verification_unavailable"
