"""
Messages and failure classification shared by every provider strategy.

An expired or already-redeemed token is reported with its own message so the
client knows to re-run the challenge instead of treating the caller as a bot.
"""

from __future__ import annotations

from typing import Iterable, Optional

from schemas.models.captcha import CaptchaValidationResult, SiteverifyResponse

# siteverify error codes (Google and Turnstile) meaning "expired or reused"
EXPIRATION_CODES = frozenset({"timeout-or-duplicate"})
# reCAPTCHA Enterprise tokenProperties.invalidReason values with the same meaning
ENTERPRISE_EXPIRATION_REASONS = frozenset({"EXPIRED", "DUPE"})

MSG_VALIDATED = "Captcha validated successfully."
MSG_FAILED = "Captcha validation failed."
MSG_EXPIRED = "Captcha expired. Please try again."
MSG_SCORE_TOO_LOW = "Captcha validation failed: score is too low."
MSG_TOKEN_REQUIRED = "Captcha token required"
MSG_NOT_CONFIGURED = "Captcha secret key not configured"
MSG_ENTERPRISE_NOT_CONFIGURED = (
    "Captcha Enterprise requires project_id and api_key to be configured"
)
MSG_REQUEST_FAILED = "Failed to validate captcha"


class CaptchaUpstreamError(Exception):
    """The verification endpoint answered with a non-200 status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Captcha provider returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


def is_expired(error_codes: Optional[Iterable[str]]) -> bool:
    if not error_codes:
        return False
    return any(code in EXPIRATION_CODES for code in error_codes)


def meets_minimum_score(score: Optional[float], minimum_score: float) -> bool:
    # A score-based provider that omits the score never passes the threshold
    return score is not None and score >= minimum_score


def rejected(data: SiteverifyResponse) -> CaptchaValidationResult:
    """Build the failure result for a siteverify body with success=false."""
    expired = is_expired(data.error_codes)
    return CaptchaValidationResult.failure(
        MSG_EXPIRED if expired else MSG_FAILED,
        error_codes=data.error_codes or None,
        expired=expired,
    )
