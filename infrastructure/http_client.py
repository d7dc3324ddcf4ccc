"""Shared async HTTP client for the outbound verification call."""

from typing import Any, Optional

import httpx

DEFAULT_TIMEOUT_SECONDS = 5.0


class HttpClient:
    """Thin async wrapper around httpx.AsyncClient with a bounded timeout.

    One instance is opened per application and shared by every request; it
    holds no per-request state, only the connection pool.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def post_form(self, url: str, data: dict[str, str]) -> httpx.Response:
        """POST an application/x-www-form-urlencoded body."""
        return await self._client.post(url, data=data)

    async def post_json(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        """POST a JSON body."""
        return await self._client.post(url, json=payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
