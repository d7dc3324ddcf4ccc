"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain async functions
used with FastAPI's Depends() system.

Routes opt into the CAPTCHA gate with ``Depends(require_captcha())`` and opt
out with ``require_captcha(skip=True)``; the decision lives next to the route,
not in metadata read back at request time.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Optional

from fastapi import Depends, Request
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from config import AppSettings
from services.captcha_gate import CaptchaContext, CaptchaGate

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_captcha_gate(request: Request) -> CaptchaGate:
    """Return the CaptchaGate built during application startup."""
    return request.app.state.captcha_gate


async def read_body_fields(request: Request) -> Optional[Mapping[str, Any]]:
    """Parse a JSON object or form body; anything else counts as no body."""
    content_type = request.headers.get("content-type", "").lower()
    if "json" in content_type:
        try:
            body = await request.json()
        except (ValueError, UnicodeDecodeError):
            return None
        return body if isinstance(body, dict) else None
    if content_type.startswith(_FORM_CONTENT_TYPES):
        try:
            return await request.form()
        except (HTTPException, MultiPartException):
            return None
    return None


def require_captcha(
    skip: bool = False,
) -> Callable[..., Awaitable[CaptchaContext]]:
    """Build a dependency that runs the CAPTCHA gate for one route."""

    async def captcha_dependency(
        request: Request, gate: CaptchaGate = Depends(get_captcha_gate)
    ) -> CaptchaContext:
        if skip:
            return await gate.check(request.headers, skip=True)
        body = await read_body_fields(request)
        return await gate.check(request.headers, body, request.query_params)

    return captcha_dependency
