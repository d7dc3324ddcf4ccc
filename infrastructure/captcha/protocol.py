"""CaptchaVerifier protocol. The gate depends on this, not on the concrete validator."""

from typing import Protocol

from schemas.models.captcha import CaptchaValidationResult


class CaptchaVerifier(Protocol):
    async def validate(self, token: str) -> CaptchaValidationResult: ...
