"""
Health and public configuration endpoints.

GET /health — reports whether the CAPTCHA gate can verify tokens.
Rules:
- Gate enabled with a secret (and Enterprise credentials where needed) → "healthy".
- Gate disabled or missing configuration → "degraded" (200); every guarded
  route would either pass unchecked or reject everything.

GET /captcha/config returns what a frontend needs to know to send a token.
The secret key and API key are never included.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import AppSettings
from dependencies import get_captcha_gate, get_settings
from services.captcha_gate import CaptchaGate

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: AppSettings = Depends(get_settings)) -> JSONResponse:
    captcha = settings.captcha
    if not captcha.enabled:
        check = "disabled"
    elif not captcha.secret_key or (
        captcha.is_enterprise and not (captcha.project_id and captcha.api_key)
    ):
        check = "not_configured"
    else:
        check = "ok"

    overall = "healthy" if check == "ok" else "degraded"
    return JSONResponse(
        status_code=200,
        content={"status": overall, "checks": {"captcha": check}},
    )


@router.get("/captcha/config")
async def captcha_config(
    settings: AppSettings = Depends(get_settings),
    gate: CaptchaGate = Depends(get_captcha_gate),
) -> dict:
    captcha = settings.captcha
    payload: dict = {
        "provider": captcha.provider.value,
        "enabled": captcha.enabled,
        "token_locations": gate.accepted_locations,
    }
    if captcha.provider.is_score_based:
        payload["minimum_score"] = captcha.minimum_score
    return payload
