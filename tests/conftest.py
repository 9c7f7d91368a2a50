"""Shared test fixtures for rbxsync tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from rbxsync.contracts.config import RbxSyncConfig
from tests.fakes.gateway import FakeGateway, FakeUniverseGateway

VIP_ICON = b"\x89PNG\r\n\x1a\nvip-icon"


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    path = tmp_path / "assets"
    path.mkdir()
    return path


@pytest.fixture
def write_icon(assets_dir: Path) -> Callable[[str, bytes], Path]:
    def _write(name: str, content: bytes = VIP_ICON) -> Path:
        path = assets_dir / name
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture
def make_config(tmp_path: Path, assets_dir: Path) -> Callable[..., RbxSyncConfig]:
    def _make(**overrides: Any) -> RbxSyncConfig:
        payload: dict[str, Any] = {
            "project_root": tmp_path,
            "assets_dir": assets_dir,
            "creator": {"id": "42", "type": "user"},
            "universe": {"id": 99},
        }
        payload.update(overrides)
        return RbxSyncConfig.model_validate(payload)

    return _make


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def universe_gateway() -> FakeUniverseGateway:
    return FakeUniverseGateway()
