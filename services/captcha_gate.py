"""
CaptchaGate decides whether a request may reach its handler.

Token lookup order (first non-empty value wins):

1. ``X-Captcha-Token`` header
2. ``Authorization: Captcha <token>``
3. body field ``captchaToken``, then ``captcha_token``
4. query field ``captchaToken``, then ``captcha_token`` (if allow_query_token)

A missing token is rejected without calling the verifier. A rejected token
raises CaptchaValidationError with the verifier's message. An accepted token
is returned to the caller as a CaptchaContext; nothing is written back onto
the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from config import CaptchaSettings
from errors import CaptchaRequiredError, CaptchaValidationError
from infrastructure.captcha.protocol import CaptchaVerifier
from schemas.models.captcha import CaptchaValidationResult
from shared.logging import get_logger

log = get_logger(__name__)

TOKEN_HEADER = "X-Captcha-Token"
AUTHORIZATION_SCHEME = "Captcha"
TOKEN_FIELDS = ("captchaToken", "captcha_token")
DEFAULT_REJECTION_MESSAGE = "Captcha validation failed"


@dataclass(frozen=True)
class CaptchaContext:
    """What the gate hands to the route handler after letting a request through."""

    token: Optional[str] = None
    result: Optional[CaptchaValidationResult] = None
    skipped: bool = False


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _first_field(source: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not source:
        return None
    for name in TOKEN_FIELDS:
        token = _clean(source.get(name))
        if token:
            return token
    return None


class CaptchaGate:
    def __init__(self, verifier: CaptchaVerifier, settings: CaptchaSettings) -> None:
        self._verifier = verifier
        self._settings = settings

    @property
    def accepted_locations(self) -> list[str]:
        fields = " or ".join(TOKEN_FIELDS)
        locations = [
            f"header ({TOKEN_HEADER})",
            f"Authorization header ({AUTHORIZATION_SCHEME} <token>)",
            f"body ({fields})",
        ]
        if self._settings.allow_query_token:
            locations.append(f"query ({fields})")
        return locations

    def extract_token(
        self,
        headers: Mapping[str, str],
        body: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        lowered = {k.lower(): v for k, v in headers.items()}

        token = _clean(lowered.get(TOKEN_HEADER.lower()))
        if token:
            return token

        authorization = _clean(lowered.get("authorization"))
        if authorization:
            parts = authorization.split(None, 1)
            if len(parts) == 2 and parts[0].lower() == AUTHORIZATION_SCHEME.lower():
                token = _clean(parts[1])
                if token:
                    return token

        token = _first_field(body)
        if token:
            return token

        if self._settings.allow_query_token:
            return _first_field(query)
        return None

    async def check(
        self,
        headers: Mapping[str, str],
        body: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
        *,
        skip: bool = False,
    ) -> CaptchaContext:
        """Allow the request (returning its context) or raise a 401 error."""
        if skip or not self._settings.enabled:
            log.debug("captcha_skipped", route_flag=skip, enabled=self._settings.enabled)
            return CaptchaContext(skipped=True)

        token = self.extract_token(headers, body, query)
        if not token:
            log.info("captcha_token_missing")
            raise CaptchaRequiredError(
                "Captcha token is required. Provide it in "
                + ", ".join(self.accepted_locations)
            )

        result = await self._verifier.validate(token)
        if not result.success:
            log.info(
                "captcha_rejected",
                reason=result.message,
                error_codes=result.error_codes,
                expired=result.expired,
            )
            raise CaptchaValidationError(
                result.message or DEFAULT_REJECTION_MESSAGE,
                expired=result.expired,
                details={"error_codes": result.error_codes} if result.error_codes else None,
            )

        return CaptchaContext(token=token, result=result)
