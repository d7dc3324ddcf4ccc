"""Google reCAPTCHA Enterprise verification via ``projects.assessments.create``.

The assessment endpoint is addressed by GCP project and authenticated by an
API key in the query string; both must be configured. An invalid token comes
back with ``tokenProperties.valid = false`` and a reason such as
``MALFORMED``, ``EXPIRED`` or ``DUPE``; the reason is surfaced verbatim.
"""

from config import CaptchaSettings
from infrastructure.captcha.outcome import (
    ENTERPRISE_EXPIRATION_REASONS,
    MSG_ENTERPRISE_NOT_CONFIGURED,
    MSG_FAILED,
    MSG_SCORE_TOO_LOW,
    MSG_VALIDATED,
    CaptchaUpstreamError,
    meets_minimum_score,
)
from infrastructure.http_client import HttpClient
from schemas.models.captcha import (
    CaptchaProvider,
    CaptchaValidationResult,
    EnterpriseAssessment,
)
from shared.logging import get_logger

log = get_logger(__name__)

ENTERPRISE_VERIFY_URL = (
    "https://recaptchaenterprise.googleapis.com/v1/projects/{project_id}"
    "/assessments?key={api_key}"
)


def assessment_url(settings: CaptchaSettings) -> str:
    if settings.verify_url:
        return settings.verify_url
    return ENTERPRISE_VERIFY_URL.format(
        project_id=settings.project_id, api_key=settings.api_key
    )


async def verify_recaptcha_enterprise(
    http: HttpClient, settings: CaptchaSettings, token: str
) -> CaptchaValidationResult:
    if not settings.project_id or not settings.api_key:
        log.warning("captcha_enterprise_not_configured", provider=settings.provider.value)
        return CaptchaValidationResult.failure(
            MSG_ENTERPRISE_NOT_CONFIGURED, errors=[MSG_ENTERPRISE_NOT_CONFIGURED]
        )

    response = await http.post_json(
        assessment_url(settings),
        payload={"event": {"token": token, "siteKey": settings.secret_key}},
    )
    if response.status_code != 200:
        raise CaptchaUpstreamError(response.status_code, response.text[:200])

    assessment = EnterpriseAssessment.model_validate(response.json())
    props = assessment.token_properties
    score = assessment.risk_analysis.score

    if not props.valid:
        reason = props.invalid_reason
        log.warning(
            "captcha_verification_failed",
            provider=settings.provider.value,
            invalid_reason=props.invalid_reason,
        )
        return CaptchaValidationResult.failure(
            reason or MSG_FAILED,
            error_codes=[reason] if reason else None,
            expired=reason in ENTERPRISE_EXPIRATION_REASONS,
        )

    if settings.provider is CaptchaProvider.GOOGLE_RECAPTCHA_V2_ENTERPRISE:
        return CaptchaValidationResult(
            success=True,
            action=props.action,
            challenge_ts=props.create_time,
            hostname=props.hostname,
            message=MSG_VALIDATED,
        )

    score_valid = meets_minimum_score(score, settings.minimum_score)
    if not score_valid:
        log.warning(
            "captcha_score_too_low",
            provider=settings.provider.value,
            score=score,
            minimum_score=settings.minimum_score,
            action=props.action,
        )
    return CaptchaValidationResult(
        success=score_valid,
        score=score,
        action=props.action,
        challenge_ts=props.create_time,
        hostname=props.hostname,
        message=MSG_VALIDATED if score_valid else MSG_SCORE_TOO_LOW,
    )
