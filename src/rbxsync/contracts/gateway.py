"""Remote gateway contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any

from rbxsync.contracts.config import CreatorConfig
from rbxsync.contracts.resource import ResourceKind


@dataclass(frozen=True)
class ListPage:
    """One page of a remote listing; records keep their vendor field names."""

    records: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: str | None = None


@dataclass(frozen=True)
class IconFile:
    """Icon bytes sent inline with a create or update call."""

    content: bytes
    filename: str


@dataclass(frozen=True)
class AssetUpload:
    """Initial asset upload response: an immediate id or a pollable operation."""

    asset_id: int | None = None
    operation_path: str | None = None


@dataclass(frozen=True)
class OperationStatus:
    done: bool
    asset_id: int | None = None
    error_message: str | None = None


class ResourceGateway(ABC):
    """Resource CRUD, asset upload and place publishing for one universe."""

    @abstractmethod
    async def __aenter__(self) -> ResourceGateway: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def list_page(self, kind: ResourceKind, cursor: str | None = None) -> ListPage: ...  # pragma: no cover

    @abstractmethod
    async def create(
        self, kind: ResourceKind, fields: dict[str, Any], icon: IconFile | None = None
    ) -> dict[str, Any]: ...  # pragma: no cover

    @abstractmethod
    async def update(
        self, kind: ResourceKind, remote_id: int, fields: dict[str, Any], icon: IconFile | None = None
    ) -> dict[str, Any]: ...  # pragma: no cover

    @abstractmethod
    async def upload_asset(
        self, content: bytes, filename: str, display_name: str, creator: CreatorConfig
    ) -> AssetUpload: ...  # pragma: no cover

    @abstractmethod
    async def poll_operation(self, operation_path: str) -> OperationStatus: ...  # pragma: no cover

    @abstractmethod
    async def publish_place(self, place_id: int, content: bytes) -> dict[str, Any]: ...  # pragma: no cover


class UniverseGateway(ABC):
    """Universe configuration writes, authenticated separately from resources."""

    @abstractmethod
    async def __aenter__(self) -> UniverseGateway: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def update_configuration(self, settings: dict[str, Any]) -> dict[str, Any]: ...  # pragma: no cover
