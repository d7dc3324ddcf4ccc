"""Cloudflare Turnstile verification. No score; success is Cloudflare's verdict."""

from config import CaptchaSettings
from infrastructure.captcha.outcome import (
    MSG_VALIDATED,
    CaptchaUpstreamError,
    rejected,
)
from infrastructure.http_client import HttpClient
from schemas.models.captcha import CaptchaValidationResult, SiteverifyResponse
from shared.logging import get_logger

log = get_logger(__name__)

TURNSTILE_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


async def verify_turnstile(
    http: HttpClient, settings: CaptchaSettings, token: str
) -> CaptchaValidationResult:
    response = await http.post_json(
        settings.verify_url or TURNSTILE_VERIFY_URL,
        payload={"secret": settings.secret_key, "response": token},
    )
    if response.status_code != 200:
        raise CaptchaUpstreamError(response.status_code, response.text[:200])

    data = SiteverifyResponse.model_validate(response.json())

    if not data.success:
        log.warning(
            "captcha_verification_failed",
            provider=settings.provider.value,
            error_codes=data.error_codes,
        )
        return rejected(data)

    return CaptchaValidationResult(
        success=True,
        action=data.action,
        challenge_ts=data.challenge_ts,
        hostname=data.hostname,
        error_codes=data.error_codes or None,
        message=MSG_VALIDATED,
    )
