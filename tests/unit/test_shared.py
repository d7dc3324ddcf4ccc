"""Unit tests for shared logging helpers."""

import structlog

from config import LoggingSettings
from shared.logging import get_logger, redact_sensitive_fields, setup_logging


class TestRedactSensitiveFields:
    def test_redacts_tokens_and_secrets(self):
        event = {
            "event": "captcha_rejected",
            "captcha_token": "abc",
            "secret_key": "shh",
            "api_key": "k",
            "Authorization": "Captcha abc",
        }
        out = redact_sensitive_fields(None, "info", event)
        assert out["captcha_token"] == "***REDACTED***"
        assert out["secret_key"] == "***REDACTED***"
        assert out["api_key"] == "***REDACTED***"
        assert out["Authorization"] == "***REDACTED***"

    def test_keeps_reserved_and_ordinary_keys(self):
        event = {
            "event": "captcha_score_too_low",
            "level": "warning",
            "provider": "google-recaptcha-v3",
            "score": 0.2,
            "minimum_score": 0.5,
        }
        out = redact_sensitive_fields(None, "warning", dict(event))
        assert out == event


class TestSetupLogging:
    def test_json_format_configures_json_renderer(self):
        setup_logging(LoggingSettings(log_level="DEBUG", log_format="json"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert redact_sensitive_fields in processors

    def test_console_format_configures_console_renderer(self):
        setup_logging(LoggingSettings(log_format="console"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_get_logger_returns_usable_logger(self):
        log = get_logger("tests")
        log.info("test_event", provider="cloudflare-turnstile")
