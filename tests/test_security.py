from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.core.security import SecurityHeadersMiddleware
from backend.main import app


def _build_app(**options) -> FastAPI:
    test_app = FastAPI()
    test_app.add_middleware(SecurityHeadersMiddleware, **options)

    @test_app.get("/ping")
    def ping():
        return {"ok": True}

    return test_app


def test_content_security_policy_is_sent_when_configured():
    client = TestClient(_build_app(csp="default-src 'none'"))

    response = client.get("/ping")

    assert response.headers["Content-Security-Policy"] == "default-src 'none'"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_content_security_policy_is_omitted_by_default():
    response = TestClient(app).get("/health")

    assert "Content-Security-Policy" not in response.headers
    assert response.headers["Referrer-Policy"] == "same-origin"


def test_hsts_only_over_https():
    test_app = _build_app(enable_hsts=True)

    plain = TestClient(test_app).get("/ping")
    secure = TestClient(test_app, base_url="https://testserver").get("/ping")

    assert "Strict-Transport-Security" not in plain.headers
    assert secure.headers["Strict-Transport-Security"].startswith("max-age=")
