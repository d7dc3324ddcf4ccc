"""
CAPTCHA domain models.

CaptchaProvider            — closed set of supported upstream services
CaptchaValidationResult    — normalised outcome of one token verification
SiteverifyResponse         — Google siteverify / Cloudflare Turnstile body
EnterpriseAssessment       — Google reCAPTCHA Enterprise assessment body

Upstream models ignore unknown keys; providers add fields without notice.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CaptchaProvider(str, Enum):
    GOOGLE_RECAPTCHA_V2 = "google-recaptcha-v2"
    GOOGLE_RECAPTCHA_V3 = "google-recaptcha-v3"
    GOOGLE_RECAPTCHA_V2_ENTERPRISE = "google-recaptcha-v2-enterprise"
    GOOGLE_RECAPTCHA_V3_ENTERPRISE = "google-recaptcha-v3-enterprise"
    CLOUDFLARE_TURNSTILE = "cloudflare-turnstile"

    @property
    def is_enterprise(self) -> bool:
        return self in (
            CaptchaProvider.GOOGLE_RECAPTCHA_V2_ENTERPRISE,
            CaptchaProvider.GOOGLE_RECAPTCHA_V3_ENTERPRISE,
        )

    @property
    def is_score_based(self) -> bool:
        return self in (
            CaptchaProvider.GOOGLE_RECAPTCHA_V3,
            CaptchaProvider.GOOGLE_RECAPTCHA_V3_ENTERPRISE,
        )


class CaptchaValidationResult(BaseModel):
    """Outcome of a single verification, whatever the provider.

    ``error_codes`` carries what the upstream reported; ``errors`` carries
    local faults (transport, parsing, configuration).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    success: bool
    score: Optional[float] = None
    action: Optional[str] = None
    challenge_ts: Optional[str] = None
    hostname: Optional[str] = None
    error_codes: Optional[list[str]] = Field(default=None, alias="error-codes")
    errors: Optional[list[str]] = None
    message: Optional[str] = None
    expired: bool = False

    @classmethod
    def failure(cls, message: str, **kwargs) -> "CaptchaValidationResult":
        return cls(success=False, message=message, **kwargs)


class SiteverifyResponse(BaseModel):
    """Response body shared by Google siteverify and Cloudflare Turnstile."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    score: Optional[float] = None
    action: Optional[str] = None
    challenge_ts: Optional[str] = None
    hostname: Optional[str] = None
    error_codes: list[str] = Field(default_factory=list, alias="error-codes")
    cdata: Optional[str] = None


class TokenProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    valid: bool = False
    invalid_reason: Optional[str] = Field(default=None, alias="invalidReason")
    action: Optional[str] = None
    hostname: Optional[str] = None
    create_time: Optional[str] = Field(default=None, alias="createTime")


class RiskAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    score: Optional[float] = None
    reasons: list[str] = Field(default_factory=list)


class EnterpriseAssessment(BaseModel):
    """Subset of the reCAPTCHA Enterprise ``assessments.create`` response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token_properties: TokenProperties = Field(
        default_factory=TokenProperties, alias="tokenProperties"
    )
    risk_analysis: RiskAnalysis = Field(
        default_factory=RiskAnalysis, alias="riskAnalysis"
    )
