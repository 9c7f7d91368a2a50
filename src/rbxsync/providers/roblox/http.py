"""Shared HTTP helpers for the Roblox gateways."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from rbxsync.contracts.exceptions import AuthenticationError, RemoteError

_LOG = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_AUTH_STATUSES = (401, 403)


def form_value(value: Any) -> str:
    """Stringify a field for a multipart form part."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def form_parts(fields: dict[str, Any]) -> list[tuple[str, tuple[None, bytes]]]:
    """Encode plain fields as multipart parts, so a request is multipart even without files."""
    return [(key, (None, form_value(value).encode("utf-8"))) for key, value in fields.items()]


async def send(client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
    _LOG.debug("%s %s", method, url)
    try:
        return await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise RemoteError(f"API request failed: {method} {url}: {exc}") from exc


def decode(response: httpx.Response) -> dict[str, Any]:
    """Map a response to its JSON body, raising on any non-success status.

    Empty bodies (common for PATCH) decode to ``{}``.
    """
    text = response.text
    _LOG.debug("API response status: %s, body: %s", response.status_code, text)

    if not response.is_success:
        message = f"API request failed: {response.status_code} - {text}"
        if response.status_code in _AUTH_STATUSES:
            raise AuthenticationError(message, status_code=response.status_code, body=text)
        raise RemoteError(message, status_code=response.status_code, body=text)

    if not text.strip():
        return {}
    try:
        payload = response.json()
    except ValueError as exc:
        raise RemoteError(f"Failed to parse response: {text}", status_code=response.status_code, body=text) from exc
    if isinstance(payload, dict):
        return payload
    return {"data": payload}
