"""Google reCAPTCHA v2 / v3 verification via the siteverify endpoint.

v2 is a pass/fail checkbox: success is whatever Google says. v3 is invisible
and scored; Google's ``success`` only means the token was well-formed, so the
score must also clear the configured minimum.
"""

from config import CaptchaSettings
from infrastructure.captcha.outcome import (
    MSG_SCORE_TOO_LOW,
    MSG_VALIDATED,
    CaptchaUpstreamError,
    meets_minimum_score,
    rejected,
)
from infrastructure.http_client import HttpClient
from schemas.models.captcha import (
    CaptchaProvider,
    CaptchaValidationResult,
    SiteverifyResponse,
)
from shared.logging import get_logger

log = get_logger(__name__)

GOOGLE_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


async def verify_recaptcha(
    http: HttpClient, settings: CaptchaSettings, token: str
) -> CaptchaValidationResult:
    response = await http.post_form(
        settings.verify_url or GOOGLE_VERIFY_URL,
        data={"secret": settings.secret_key, "response": token},
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

    if settings.provider is CaptchaProvider.GOOGLE_RECAPTCHA_V2:
        return CaptchaValidationResult(
            success=True,
            action=data.action,
            challenge_ts=data.challenge_ts,
            hostname=data.hostname,
            error_codes=data.error_codes or None,
            message=MSG_VALIDATED,
        )

    score_valid = meets_minimum_score(data.score, settings.minimum_score)
    if not score_valid:
        log.warning(
            "captcha_score_too_low",
            provider=settings.provider.value,
            score=data.score,
            minimum_score=settings.minimum_score,
            action=data.action,
        )
    return CaptchaValidationResult(
        success=score_valid,
        score=data.score,
        action=data.action,
        challenge_ts=data.challenge_ts,
        hostname=data.hostname,
        error_codes=data.error_codes or None,
        message=MSG_VALIDATED if score_valid else MSG_SCORE_TOO_LOW,
    )
