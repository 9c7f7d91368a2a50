"""Cookie-authenticated universe configuration gateway."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from rbxsync.contracts.exceptions import RemoteError
from rbxsync.contracts.gateway import UniverseGateway
from rbxsync.providers.roblox.http import DEFAULT_TIMEOUT, decode, send

_LOG = logging.getLogger(__name__)

DEVELOP_URL = "https://develop.roblox.com"
CSRF_HEADER = "x-csrf-token"


class RobloxUniverseGateway(UniverseGateway):
    """Writes universe settings through the legacy develop API.

    The first write of a session is usually rejected with 403 and a fresh
    ``x-csrf-token`` header; the request is repeated once with that token.
    """

    def __init__(
        self,
        *,
        universe_id: int,
        cookie: str,
        develop_url: str = DEVELOP_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._universe_id = universe_id
        self._cookie = cookie
        self._develop_url = develop_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> RobloxUniverseGateway:
        self._client = httpx.AsyncClient(
            headers={"Cookie": f".ROBLOSECURITY={self._cookie}"},
            timeout=httpx.Timeout(self._timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def update_configuration(self, settings: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._develop_url}/v2/universes/{self._universe_id}/configuration"
        response = await self._patch(url, settings, csrf_token=None)

        token = response.headers.get(CSRF_HEADER)
        if response.status_code == 403 and token:
            _LOG.debug("Retrying universe configuration update with CSRF token")
            response = await self._patch(url, settings, csrf_token=token)
        return decode(response)

    async def _patch(self, url: str, settings: dict[str, Any], *, csrf_token: str | None) -> httpx.Response:
        if self._client is None:
            raise RemoteError("Gateway is not initialized. Use 'async with'.")
        headers = {CSRF_HEADER: csrf_token} if csrf_token else None
        return await send(self._client, "PATCH", url, json=settings, headers=headers)
