"""Content-addressed icon materialization."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from pathlib import Path

from rbxsync.contracts.config import CreatorConfig
from rbxsync.contracts.exceptions import AssetOperationError, ConfigError
from rbxsync.contracts.gateway import IconFile, ResourceGateway
from rbxsync.contracts.ledger import ResourceState
from rbxsync.engine.kinds import IconMode
from rbxsync.hashing import content_hash

_LOG = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 2.0
MAX_POLL_ATTEMPTS = 30


@dataclass(frozen=True)
class IconCandidate:
    """Icon state for one resource in this run.

    ``asset_id`` is set when the recorded id can be reused or once an upload
    finished. The (hash, asset id) pair only reaches the lock file after the
    owning resource's create or update succeeds.
    """

    path: Path
    content: bytes
    content_hash: str
    changed: bool
    asset_id: int | None = None

    def as_file(self) -> IconFile:
        return IconFile(content=self.content, filename=self.path.name)


def needs_upload(content_digest: str, entry: ResourceState | None) -> bool:
    """Whether an asset-backed icon with *content_digest* must be uploaded again."""
    if entry is None:
        return True
    return not (entry.icon_hash == content_digest and entry.icon_asset_id is not None)


class AssetMaterializer:
    """Turns local icon files into remote asset ids, reusing recorded ids.

    Unchanged bytes never cause an upload, whatever the file is called.
    """

    def __init__(
        self,
        gateway: ResourceGateway,
        *,
        creator: CreatorConfig | None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        max_attempts: int = MAX_POLL_ATTEMPTS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._gateway = gateway
        self._creator = creator
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts
        self._sleep = sleep

    def inspect(self, path: Path, entry: ResourceState | None, *, mode: IconMode) -> IconCandidate:
        """Hash the icon and compare it with the last applied snapshot. No network."""
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise ConfigError(f"Icon file not found: {path}") from exc
        digest = content_hash(content)

        if mode == "inline":
            changed = entry is None or entry.icon_hash != digest
            return IconCandidate(path=path, content=content, content_hash=digest, changed=changed)

        if entry is not None and not needs_upload(digest, entry):
            return IconCandidate(
                path=path,
                content=content,
                content_hash=digest,
                changed=False,
                asset_id=entry.icon_asset_id,
            )
        return IconCandidate(path=path, content=content, content_hash=digest, changed=True)

    async def materialize(self, candidate: IconCandidate) -> IconCandidate:
        """Ensure *candidate* carries an asset id, uploading when it has none."""
        if candidate.asset_id is not None:
            return candidate
        asset_id = await self.upload(candidate.content, candidate.path.name, candidate.path.stem)
        return replace(candidate, asset_id=asset_id)

    async def upload(self, content: bytes, filename: str, display_name: str) -> int:
        if self._creator is None:
            raise ConfigError("Creator configuration is required for asset uploads")

        _LOG.info("Uploading icon: %s", filename)
        upload = await self._gateway.upload_asset(content, filename, display_name, self._creator)
        if upload.asset_id is not None:
            _LOG.info("Asset uploaded with ID: %s", upload.asset_id)
            return upload.asset_id
        if not upload.operation_path:
            raise AssetOperationError("Asset upload returned neither an asset id nor an operation path")
        return await self._poll(upload.operation_path)

    async def _poll(self, operation_path: str) -> int:
        for attempt in range(1, self._max_attempts + 1):
            _LOG.debug("Polling asset operation (attempt %d): %s", attempt, operation_path)
            status = await self._gateway.poll_operation(operation_path)
            if status.error_message is not None:
                raise AssetOperationError(f"Asset operation failed: {status.error_message}")
            if status.done:
                if status.asset_id is None:
                    raise AssetOperationError("Asset operation completed but no asset ID was returned")
                _LOG.info("Asset uploaded with ID: %s", status.asset_id)
                return status.asset_id
            if attempt < self._max_attempts:
                await self._sleep(self._poll_interval)
        raise AssetOperationError(f"Asset operation polling timed out after {self._max_attempts} attempts")
