"""Open Cloud gateway for game passes, developer products, badges, assets and places."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import PurePath
from types import TracebackType
from typing import Any

import httpx

from rbxsync.contracts.config import CreatorConfig
from rbxsync.contracts.exceptions import RemoteError
from rbxsync.contracts.gateway import AssetUpload, IconFile, ListPage, OperationStatus, ResourceGateway
from rbxsync.contracts.resource import ResourceKind
from rbxsync.providers.roblox.http import DEFAULT_TIMEOUT, decode, form_parts, send

_LOG = logging.getLogger(__name__)

BASE_URL = "https://apis.roblox.com"
BADGES_URL = "https://badges.roblox.com"

_LISTING_KEYS = ("gamePasses", "developerProducts", "badges", "data")
_CURSOR_KEYS = ("nextPageCursor", "nextPageToken")

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".bmp": "image/bmp",
    ".tga": "image/tga",
}


@dataclass(frozen=True)
class _Listing:
    path: str
    limit_param: str
    limit: int
    cursor_param: str


_LISTINGS: dict[ResourceKind, _Listing] = {
    ResourceKind.GAME_PASS: _Listing(
        path="/game-passes/v1/universes/{universe_id}/game-passes",
        limit_param="limit",
        limit=100,
        cursor_param="cursor",
    ),
    ResourceKind.DEVELOPER_PRODUCT: _Listing(
        path="/developer-products/v2/universes/{universe_id}/developer-products/creator",
        limit_param="pageSize",
        limit=50,
        cursor_param="pageToken",
    ),
    ResourceKind.BADGE: _Listing(
        path="/v1/universes/{universe_id}/badges",
        limit_param="limit",
        limit=100,
        cursor_param="cursor",
    ),
}


def mime_type(filename: str) -> str:
    return _MIME_TYPES.get(PurePath(filename).suffix.lower(), "image/png")


def _asset_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


class RobloxGateway(ResourceGateway):
    """API-key authenticated gateway scoped to one universe.

    Usage::

        async with RobloxGateway(universe_id=1, api_key="...") as gateway:
            page = await gateway.list_page(ResourceKind.GAME_PASS)
    """

    def __init__(
        self,
        *,
        universe_id: int,
        api_key: str,
        base_url: str = BASE_URL,
        badges_url: str = BADGES_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._universe_id = universe_id
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._badges_url = badges_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> RobloxGateway:
        self._client = httpx.AsyncClient(
            headers={"x-api-key": self._api_key},
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

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RemoteError("Gateway is not initialized. Use 'async with'.")
        return self._client

    async def _call(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        response = await send(self._require_client(), method, url, **kwargs)
        return decode(response)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    async def list_page(self, kind: ResourceKind, cursor: str | None = None) -> ListPage:
        listing = _LISTINGS[kind]
        root = self._badges_url if kind == ResourceKind.BADGE else self._base_url
        params: dict[str, Any] = {listing.limit_param: listing.limit}
        if cursor:
            params[listing.cursor_param] = cursor

        payload = await self._call("GET", root + listing.path.format(universe_id=self._universe_id), params=params)

        records: list[dict[str, Any]] = []
        for key in _LISTING_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                records = [record for record in value if isinstance(record, dict)]
                break
        next_cursor: str | None = None
        for key in _CURSOR_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value:
                next_cursor = value
                break
        return ListPage(records=records, next_cursor=next_cursor)

    # ------------------------------------------------------------------
    # Create / update
    # ------------------------------------------------------------------

    async def create(
        self, kind: ResourceKind, fields: dict[str, Any], icon: IconFile | None = None
    ) -> dict[str, Any]:
        if kind == ResourceKind.BADGE:
            parts: list[tuple[str, Any]] = list(form_parts(fields))
            if icon is not None:
                parts.append(("request.files", (icon.filename, icon.content, mime_type(icon.filename))))
            url = f"{self._base_url}/legacy-badges/v1/universes/{self._universe_id}/badges"
            return await self._call("POST", url, files=parts)

        return await self._call("POST", self._collection_url(kind), files=form_parts(fields))

    async def update(
        self, kind: ResourceKind, remote_id: int, fields: dict[str, Any], icon: IconFile | None = None
    ) -> dict[str, Any]:
        if kind == ResourceKind.BADGE:
            record = await self._call("PATCH", f"{self._base_url}/legacy-badges/v1/badges/{remote_id}", json=fields)
            if icon is not None:
                await self._update_badge_icon(remote_id, icon)
            return record

        return await self._call("PATCH", f"{self._collection_url(kind)}/{remote_id}", files=form_parts(fields))

    async def _update_badge_icon(self, badge_id: int, icon: IconFile) -> dict[str, Any]:
        _LOG.debug("Updating icon for badge %s", badge_id)
        parts = [("request.files", (icon.filename, icon.content, mime_type(icon.filename)))]
        return await self._call("POST", f"{self._base_url}/legacy-publish/v1/badges/{badge_id}/icon", files=parts)

    def _collection_url(self, kind: ResourceKind) -> str:
        if kind == ResourceKind.GAME_PASS:
            return f"{self._base_url}/game-passes/v1/universes/{self._universe_id}/game-passes"
        if kind == ResourceKind.DEVELOPER_PRODUCT:
            return f"{self._base_url}/developer-products/v2/universes/{self._universe_id}/developer-products"
        raise ValueError(f"No collection endpoint for {kind}")

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    async def upload_asset(
        self, content: bytes, filename: str, display_name: str, creator: CreatorConfig
    ) -> AssetUpload:
        creator_ref = {"groupId": creator.id} if creator.creator_type == "group" else {"userId": creator.id}
        request = {
            "assetType": "Image",
            "displayName": display_name,
            "description": f"Uploaded by rbxsync from {filename}",
            "creationContext": {"creator": creator_ref},
        }
        parts = [
            ("request", (None, json.dumps(request).encode("utf-8"))),
            ("fileContent", (filename, content, mime_type(filename))),
        ]
        operation = await self._call("POST", f"{self._base_url}/assets/v1/assets", files=parts)

        if operation.get("done"):
            asset_id = _asset_id((operation.get("response") or {}).get("assetId"))
            if asset_id is not None:
                return AssetUpload(asset_id=asset_id)
        path = operation.get("path")
        if not isinstance(path, str) or not path:
            raise RemoteError(f"Asset upload response is missing an operation path: {operation}")
        return AssetUpload(operation_path=path)

    async def poll_operation(self, operation_path: str) -> OperationStatus:
        operation = await self._call("GET", f"{self._base_url}/assets/v1/{operation_path.lstrip('/')}")
        error = operation.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else None
            return OperationStatus(done=True, error_message=message or "Unknown error")
        return OperationStatus(
            done=bool(operation.get("done")),
            asset_id=_asset_id((operation.get("response") or {}).get("assetId")),
        )

    # ------------------------------------------------------------------
    # Places
    # ------------------------------------------------------------------

    async def publish_place(self, place_id: int, content: bytes) -> dict[str, Any]:
        url = f"{self._base_url}/universes/v1/{self._universe_id}/places/{place_id}/versions"
        return await self._call(
            "POST",
            url,
            params={"versionType": "Published"},
            content=content,
            headers={"Content-Type": "application/octet-stream"},
        )
