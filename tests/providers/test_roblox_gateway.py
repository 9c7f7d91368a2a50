from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from rbxsync.contracts.config import CreatorConfig
from rbxsync.contracts.exceptions import AuthenticationError, RemoteError
from rbxsync.contracts.gateway import IconFile
from rbxsync.contracts.resource import ResourceKind
from rbxsync.providers.roblox.gateway import RobloxGateway, mime_type
from rbxsync.providers.roblox.http import form_parts, form_value

Handler = Callable[[httpx.Request], httpx.Response]


def _gateway(handler: Handler, **kwargs) -> RobloxGateway:
    return RobloxGateway(universe_id=99, api_key="secret", transport=httpx.MockTransport(handler), **kwargs)


def test_form_value_stringifies_wire_values() -> None:
    assert form_value(True) == "true"
    assert form_value(False) == "false"
    assert form_value(None) == ""
    assert form_value(100) == "100"
    assert form_value([1, 2]) == "[1, 2]"


def test_form_parts_are_nameless_byte_parts() -> None:
    assert form_parts({"name": "VIP", "isForSale": True}) == [
        ("name", (None, b"VIP")),
        ("isForSale", (None, b"true")),
    ]


def test_mime_type_follows_extension() -> None:
    assert mime_type("icon.PNG") == "image/png"
    assert mime_type("icon.jpeg") == "image/jpeg"
    assert mime_type("icon") == "image/png"


@pytest.mark.asyncio
async def test_list_page_game_passes_uses_cursor_and_api_key() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"gamePasses": [{"gamePassId": 1, "name": "VIP"}], "nextPageCursor": "abc"},
        )

    async with _gateway(handler) as gateway:
        page = await gateway.list_page(ResourceKind.GAME_PASS, cursor="prev")

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/game-passes/v1/universes/99/game-passes"
    assert request.url.params["limit"] == "100"
    assert request.url.params["cursor"] == "prev"
    assert request.headers["x-api-key"] == "secret"
    assert page.records == [{"gamePassId": 1, "name": "VIP"}]
    assert page.next_cursor == "abc"


@pytest.mark.asyncio
async def test_list_page_developer_products_uses_page_token() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"developerProducts": [{"productId": 7}], "nextPageToken": ""})

    async with _gateway(handler) as gateway:
        page = await gateway.list_page(ResourceKind.DEVELOPER_PRODUCT, cursor="tok")

    request = seen[0]
    assert request.url.path == "/developer-products/v2/universes/99/developer-products/creator"
    assert request.url.params["pageSize"] == "50"
    assert request.url.params["pageToken"] == "tok"
    assert page.records == [{"productId": 7}]
    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_list_page_badges_reads_legacy_host_and_omits_empty_cursor() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"id": 3, "name": "Winner"}, "junk"], "nextPageCursor": None})

    async with _gateway(handler) as gateway:
        page = await gateway.list_page(ResourceKind.BADGE)

    request = seen[0]
    assert request.url.host == "badges.roblox.com"
    assert request.url.path == "/v1/universes/99/badges"
    assert "cursor" not in request.url.params
    assert page.records == [{"id": 3, "name": "Winner"}]
    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_create_game_pass_posts_multipart_form() -> None:
    seen: list[tuple[httpx.Request, bytes]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request, request.read()))
        return httpx.Response(200, json={"gamePassId": 11})

    async with _gateway(handler) as gateway:
        record = await gateway.create(
            ResourceKind.GAME_PASS, {"name": "VIP", "price": 100, "isForSale": True, "iconAssetId": 5}
        )

    request, body = seen[0]
    assert record == {"gamePassId": 11}
    assert request.method == "POST"
    assert request.url.path == "/game-passes/v1/universes/99/game-passes"
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="price"\r\n\r\n100\r\n' in body
    assert b'name="isForSale"\r\n\r\ntrue\r\n' in body
    assert b'name="iconAssetId"\r\n\r\n5\r\n' in body


@pytest.mark.asyncio
async def test_update_developer_product_patches_item_url() -> None:
    seen: list[tuple[httpx.Request, bytes]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request, request.read()))
        return httpx.Response(204)

    async with _gateway(handler) as gateway:
        record = await gateway.update(ResourceKind.DEVELOPER_PRODUCT, 7, {"price": 25})

    request, body = seen[0]
    assert record == {}
    assert request.method == "PATCH"
    assert request.url.path == "/developer-products/v2/universes/99/developer-products/7"
    assert b'name="price"\r\n\r\n25\r\n' in body


@pytest.mark.asyncio
async def test_create_badge_sends_icon_as_request_files() -> None:
    seen: list[tuple[httpx.Request, bytes]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request, request.read()))
        return httpx.Response(200, json={"id": 3})

    async with _gateway(handler) as gateway:
        record = await gateway.create(
            ResourceKind.BADGE,
            {"name": "Winner", "paymentSourceType": "User"},
            icon=IconFile(content=b"png-bytes", filename="winner.png"),
        )

    request, body = seen[0]
    assert record == {"id": 3}
    assert request.url.path == "/legacy-badges/v1/universes/99/badges"
    assert b'name="paymentSourceType"\r\n\r\nUser\r\n' in body
    assert b'name="request.files"; filename="winner.png"' in body
    assert b"Content-Type: image/png" in body
    assert b"png-bytes" in body


@pytest.mark.asyncio
async def test_update_badge_patches_json_then_posts_icon() -> None:
    seen: list[tuple[httpx.Request, bytes]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request, request.read()))
        return httpx.Response(200, json={})

    async with _gateway(handler) as gateway:
        await gateway.update(
            ResourceKind.BADGE,
            3,
            {"name": "Winner", "enabled": True},
            icon=IconFile(content=b"new-icon", filename="winner.jpg"),
        )

    (patch, patch_body), (icon, icon_body) = seen
    assert patch.method == "PATCH"
    assert patch.url.path == "/legacy-badges/v1/badges/3"
    assert json.loads(patch_body) == {"name": "Winner", "enabled": True}
    assert icon.method == "POST"
    assert icon.url.path == "/legacy-publish/v1/badges/3/icon"
    assert b'filename="winner.jpg"' in icon_body
    assert b"Content-Type: image/jpeg" in icon_body


@pytest.mark.asyncio
async def test_update_badge_without_icon_makes_single_request() -> None:
    calls: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.method)
        return httpx.Response(200, json={})

    async with _gateway(handler) as gateway:
        await gateway.update(ResourceKind.BADGE, 3, {"enabled": False})

    assert calls == ["PATCH"]


@pytest.mark.asyncio
async def test_upload_asset_returns_immediate_asset_id() -> None:
    seen: list[tuple[httpx.Request, bytes]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request, request.read()))
        return httpx.Response(200, json={"done": True, "response": {"assetId": "123"}})

    async with _gateway(handler) as gateway:
        upload = await gateway.upload_asset(b"img", "vip.png", "vip", CreatorConfig(id="42", creator_type="group"))

    request, body = seen[0]
    assert upload.asset_id == 123
    assert upload.operation_path is None
    assert request.url.path == "/assets/v1/assets"
    assert b'"groupId": "42"' in body
    assert b'"assetType": "Image"' in body
    assert b'name="fileContent"; filename="vip.png"' in body


@pytest.mark.asyncio
async def test_upload_asset_returns_operation_path_when_pending() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"path": "operations/abc", "done": False})

    async with _gateway(handler) as gateway:
        upload = await gateway.upload_asset(b"img", "vip.png", "vip", CreatorConfig(id="7", creator_type="user"))

    assert upload.asset_id is None
    assert upload.operation_path == "operations/abc"


@pytest.mark.asyncio
async def test_upload_asset_without_path_or_id_is_remote_error() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"done": False})

    async with _gateway(handler) as gateway:
        with pytest.raises(RemoteError, match="operation path"):
            await gateway.upload_asset(b"img", "vip.png", "vip", CreatorConfig(id="7", creator_type="user"))


@pytest.mark.asyncio
async def test_poll_operation_reports_progress_and_errors() -> None:
    responses = [
        httpx.Response(200, json={"done": False}),
        httpx.Response(200, json={"done": True, "response": {"assetId": 555}}),
        httpx.Response(200, json={"done": True, "error": {"message": "moderated"}}),
    ]
    paths: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return responses.pop(0)

    async with _gateway(handler) as gateway:
        pending = await gateway.poll_operation("operations/abc")
        finished = await gateway.poll_operation("operations/abc")
        failed = await gateway.poll_operation("/operations/abc")

    assert paths == ["/assets/v1/operations/abc"] * 3
    assert (pending.done, pending.asset_id) == (False, None)
    assert (finished.done, finished.asset_id) == (True, 555)
    assert (failed.done, failed.error_message) == (True, "moderated")


@pytest.mark.asyncio
async def test_publish_place_posts_octet_stream_version() -> None:
    seen: list[tuple[httpx.Request, bytes]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request, request.read()))
        return httpx.Response(200, json={"versionNumber": 4})

    async with _gateway(handler) as gateway:
        result = await gateway.publish_place(1234, b"rbxl-bytes")

    request, body = seen[0]
    assert result == {"versionNumber": 4}
    assert request.url.path == "/universes/v1/99/places/1234/versions"
    assert request.url.params["versionType"] == "Published"
    assert request.headers["content-type"] == "application/octet-stream"
    assert body == b"rbxl-bytes"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_auth_statuses_raise_authentication_error(status: int) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="Invalid API key")

    async with _gateway(handler) as gateway:
        with pytest.raises(AuthenticationError) as exc_info:
            await gateway.list_page(ResourceKind.GAME_PASS)

    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_server_error_carries_status_and_body() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    async with _gateway(handler) as gateway:
        with pytest.raises(RemoteError) as exc_info:
            await gateway.create(ResourceKind.GAME_PASS, {"name": "VIP"})

    assert not isinstance(exc_info.value, AuthenticationError)
    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "boom"
    assert str(exc_info.value) == "API request failed: 500 - boom"


@pytest.mark.asyncio
async def test_malformed_json_is_remote_error() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    async with _gateway(handler) as gateway:
        with pytest.raises(RemoteError, match="Failed to parse response"):
            await gateway.list_page(ResourceKind.BADGE)


@pytest.mark.asyncio
async def test_transport_failure_is_remote_error() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with _gateway(handler) as gateway:
        with pytest.raises(RemoteError, match="unreachable"):
            await gateway.list_page(ResourceKind.GAME_PASS)


@pytest.mark.asyncio
async def test_gateway_requires_context_manager() -> None:
    gateway = RobloxGateway(universe_id=1, api_key="k")

    with pytest.raises(RemoteError, match="async with"):
        await gateway.list_page(ResourceKind.GAME_PASS)
