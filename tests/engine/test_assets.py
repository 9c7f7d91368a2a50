from __future__ import annotations

from pathlib import Path

import pytest

from rbxsync.contracts.config import CreatorConfig
from rbxsync.contracts.exceptions import AssetOperationError, ConfigError
from rbxsync.contracts.gateway import OperationStatus
from rbxsync.contracts.ledger import ResourceState
from rbxsync.engine.assets import MAX_POLL_ATTEMPTS, POLL_INTERVAL_SECONDS, AssetMaterializer, needs_upload
from rbxsync.hashing import content_hash
from tests.fakes.gateway import FakeGateway

CREATOR = CreatorConfig(id="42", creator_type="group")


class SleepSpy:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def icon(tmp_path: Path) -> Path:
    path = tmp_path / "vip.png"
    path.write_bytes(b"icon-bytes")
    return path


def test_needs_upload_only_when_hash_or_asset_id_missing() -> None:
    digest = content_hash(b"icon-bytes")

    assert needs_upload(digest, None)
    assert needs_upload(digest, ResourceState(name="VIP", icon_hash=digest))
    assert needs_upload(digest, ResourceState(name="VIP", icon_hash="other", icon_asset_id=1))
    assert not needs_upload(digest, ResourceState(name="VIP", icon_hash=digest, icon_asset_id=1))


def test_inspect_reuses_recorded_asset_id_for_same_bytes(icon: Path) -> None:
    materializer = AssetMaterializer(FakeGateway(), creator=CREATOR)
    entry = ResourceState(name="VIP", icon_hash=content_hash(b"icon-bytes"), icon_asset_id=77)

    candidate = materializer.inspect(icon, entry, mode="asset")

    assert candidate.changed is False
    assert candidate.asset_id == 77


def test_inspect_never_carries_stale_asset_id_for_new_bytes(icon: Path) -> None:
    materializer = AssetMaterializer(FakeGateway(), creator=CREATOR)
    entry = ResourceState(name="VIP", icon_hash=content_hash(b"old"), icon_asset_id=77)

    candidate = materializer.inspect(icon, entry, mode="asset")

    assert candidate.changed is True
    assert candidate.asset_id is None
    assert candidate.content_hash == content_hash(b"icon-bytes")


def test_inspect_missing_file_is_config_error(tmp_path: Path) -> None:
    materializer = AssetMaterializer(FakeGateway(), creator=CREATOR)

    with pytest.raises(ConfigError, match="Icon file not found"):
        materializer.inspect(tmp_path / "missing.png", None, mode="asset")


@pytest.mark.asyncio
async def test_materialize_uses_immediate_asset_id(icon: Path) -> None:
    gateway = FakeGateway()
    materializer = AssetMaterializer(gateway, creator=CREATOR)

    candidate = await materializer.materialize(materializer.inspect(icon, None, mode="asset"))

    assert candidate.asset_id == 5000
    content, filename, display_name, creator = gateway.upload_calls[0]
    assert (content, filename, display_name) == (b"icon-bytes", "vip.png", "vip")
    assert creator == CREATOR
    assert gateway.poll_calls == []


@pytest.mark.asyncio
async def test_materialize_skips_upload_when_asset_id_reused(icon: Path) -> None:
    gateway = FakeGateway()
    materializer = AssetMaterializer(gateway, creator=CREATOR)
    entry = ResourceState(name="VIP", icon_hash=content_hash(b"icon-bytes"), icon_asset_id=77)

    candidate = await materializer.materialize(materializer.inspect(icon, entry, mode="asset"))

    assert candidate.asset_id == 77
    assert gateway.upload_calls == []


@pytest.mark.asyncio
async def test_upload_polls_operation_until_done() -> None:
    gateway = FakeGateway()
    gateway.operation_statuses = [
        OperationStatus(done=False),
        OperationStatus(done=False),
        OperationStatus(done=True, asset_id=321),
    ]
    sleep = SleepSpy()
    materializer = AssetMaterializer(gateway, creator=CREATOR, sleep=sleep)

    asset_id = await materializer.upload(b"bytes", "vip.png", "vip")

    assert asset_id == 321
    assert gateway.poll_calls == ["operations/op-1"] * 3
    assert sleep.calls == [POLL_INTERVAL_SECONDS, POLL_INTERVAL_SECONDS]


@pytest.mark.asyncio
async def test_upload_surfaces_remote_operation_error() -> None:
    gateway = FakeGateway()
    gateway.operation_statuses = [OperationStatus(done=True, error_message="Image was rejected by moderation")]
    materializer = AssetMaterializer(gateway, creator=CREATOR, sleep=SleepSpy())

    with pytest.raises(AssetOperationError, match="Image was rejected by moderation"):
        await materializer.upload(b"bytes", "vip.png", "vip")


@pytest.mark.asyncio
async def test_upload_done_without_asset_id_fails() -> None:
    gateway = FakeGateway()
    gateway.operation_statuses = [OperationStatus(done=True)]
    materializer = AssetMaterializer(gateway, creator=CREATOR, sleep=SleepSpy())

    with pytest.raises(AssetOperationError, match="no asset ID"):
        await materializer.upload(b"bytes", "vip.png", "vip")


@pytest.mark.asyncio
async def test_upload_times_out_after_poll_ceiling() -> None:
    gateway = FakeGateway()
    gateway.operation_statuses = [OperationStatus(done=False)]
    sleep = SleepSpy()
    materializer = AssetMaterializer(gateway, creator=CREATOR, sleep=sleep)

    with pytest.raises(AssetOperationError, match="timed out"):
        await materializer.upload(b"bytes", "vip.png", "vip")

    assert MAX_POLL_ATTEMPTS == 30
    assert len(gateway.poll_calls) == MAX_POLL_ATTEMPTS
    assert sleep.calls == [2.0] * (MAX_POLL_ATTEMPTS - 1)


@pytest.mark.asyncio
async def test_upload_without_creator_is_config_error() -> None:
    gateway = FakeGateway()
    materializer = AssetMaterializer(gateway, creator=None)

    with pytest.raises(ConfigError, match="Creator"):
        await materializer.upload(b"bytes", "vip.png", "vip")

    assert gateway.upload_calls == []
