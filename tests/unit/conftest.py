"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests. Tests control config exclusively through monkeypatch.setenv()
or explicit keyword arguments.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config import CaptchaSettings
from schemas.models.captcha import CaptchaProvider


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def make_settings():
    """Build CaptchaSettings with a secret and the given overrides."""

    def _make(provider=CaptchaProvider.GOOGLE_RECAPTCHA_V3, **overrides):
        overrides.setdefault("secret_key", "test-secret")
        return CaptchaSettings(provider=provider, **overrides)

    return _make


def _response(body=None, status_code=200, text=""):
    resp = MagicMock(status_code=status_code, text=text)
    resp.json.return_value = body
    return resp


@pytest.fixture
def http():
    """A stand-in HttpClient whose post_form/post_json return 200 {} by default."""
    client = MagicMock()
    client.post_form = AsyncMock(return_value=_response({}))
    client.post_json = AsyncMock(return_value=_response({}))
    return client
