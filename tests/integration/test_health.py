"""Integration tests for GET /health and GET /captcha/config."""

from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, CaptchaSettings
from schemas.models.captcha import CaptchaProvider


def _build_app(**captcha_overrides):
    captcha_overrides.setdefault("provider", CaptchaProvider.GOOGLE_RECAPTCHA_V3)
    captcha_overrides.setdefault("secret_key", "test-secret")
    settings = AppSettings(captcha=CaptchaSettings(**captcha_overrides))
    return create_app(settings)


class TestHealthEndpoint:
    def test_healthy_when_configured(self):
        with TestClient(_build_app()) as client:
            resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy", "checks": {"captcha": "ok"}}

    def test_degraded_when_secret_missing(self):
        with TestClient(_build_app(secret_key="")) as client:
            resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "degraded"
        assert body["checks"]["captcha"] == "not_configured"

    def test_degraded_when_enterprise_credentials_missing(self):
        app = _build_app(provider=CaptchaProvider.GOOGLE_RECAPTCHA_V3_ENTERPRISE)
        with TestClient(app) as client:
            resp = client.get("/health")
        assert resp.json()["checks"]["captcha"] == "not_configured"

    def test_degraded_when_disabled(self):
        with TestClient(_build_app(enabled=False)) as client:
            resp = client.get("/health")
        assert resp.json() == {"status": "degraded", "checks": {"captcha": "disabled"}}


class TestCaptchaConfigEndpoint:
    def test_score_based_provider_reports_minimum_score(self):
        with TestClient(_build_app(minimum_score=0.7)) as client:
            resp = client.get("/captcha/config")
        assert resp.status_code == 200
        body = resp.json()
        assert body["provider"] == "google-recaptcha-v3"
        assert body["enabled"] is True
        assert body["minimum_score"] == 0.7
        assert any("X-Captcha-Token" in loc for loc in body["token_locations"])

    def test_turnstile_omits_minimum_score(self):
        app = _build_app(provider=CaptchaProvider.CLOUDFLARE_TURNSTILE)
        with TestClient(app) as client:
            body = client.get("/captcha/config").json()
        assert body["provider"] == "cloudflare-turnstile"
        assert "minimum_score" not in body

    def test_never_exposes_secrets(self):
        app = _build_app(
            provider=CaptchaProvider.GOOGLE_RECAPTCHA_V3_ENTERPRISE,
            secret_key="super-secret",
            project_id="proj",
            api_key="api-key-123",
        )
        with TestClient(app) as client:
            text = client.get("/captcha/config").text
        assert "super-secret" not in text
        assert "api-key-123" not in text
