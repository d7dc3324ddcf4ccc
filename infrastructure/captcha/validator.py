"""CaptchaValidator: dispatches a token to the configured provider's strategy.

Every call produces a well-formed CaptchaValidationResult. Missing tokens and
missing configuration short-circuit before any network traffic; transport,
status and parsing faults are logged and turned into failures so the gate can
always answer with a clean 401.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from config import CaptchaSettings
from infrastructure.captcha.outcome import (
    MSG_NOT_CONFIGURED,
    MSG_REQUEST_FAILED,
    MSG_TOKEN_REQUIRED,
)
from infrastructure.captcha.recaptcha import verify_recaptcha
from infrastructure.captcha.recaptcha_enterprise import verify_recaptcha_enterprise
from infrastructure.captcha.turnstile import verify_turnstile
from infrastructure.http_client import HttpClient
from schemas.models.captcha import CaptchaProvider, CaptchaValidationResult
from shared.logging import get_logger

log = get_logger(__name__)

Strategy = Callable[
    [HttpClient, CaptchaSettings, str], Awaitable[CaptchaValidationResult]
]

STRATEGIES: dict[CaptchaProvider, Strategy] = {
    CaptchaProvider.GOOGLE_RECAPTCHA_V2: verify_recaptcha,
    CaptchaProvider.GOOGLE_RECAPTCHA_V3: verify_recaptcha,
    CaptchaProvider.GOOGLE_RECAPTCHA_V2_ENTERPRISE: verify_recaptcha_enterprise,
    CaptchaProvider.GOOGLE_RECAPTCHA_V3_ENTERPRISE: verify_recaptcha_enterprise,
    CaptchaProvider.CLOUDFLARE_TURNSTILE: verify_turnstile,
}


class CaptchaValidator:
    def __init__(self, settings: CaptchaSettings, http_client: HttpClient) -> None:
        self._settings = settings
        self._http = http_client

    @property
    def provider(self) -> CaptchaProvider:
        return self._settings.provider

    @property
    def minimum_score(self) -> float:
        return self._settings.minimum_score

    async def validate(self, token: str) -> CaptchaValidationResult:
        if not token or not token.strip():
            return CaptchaValidationResult.failure(MSG_TOKEN_REQUIRED)

        if not self._settings.secret_key:
            log.warning("captcha_not_configured", provider=self.provider.value)
            return CaptchaValidationResult.failure(
                MSG_NOT_CONFIGURED, errors=[MSG_NOT_CONFIGURED]
            )

        strategy = STRATEGIES[self.provider]
        try:
            return await strategy(self._http, self._settings, token)
        except Exception as e:
            log.error(
                "captcha_request_failed",
                provider=self.provider.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return CaptchaValidationResult.failure(
                MSG_REQUEST_FAILED, errors=[str(e) or type(e).__name__]
            )
