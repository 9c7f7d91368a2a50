"""Public contracts for rbxsync."""

from rbxsync.contracts.config import (
    BadgeConfig,
    CreatorConfig,
    DeclaredResource,
    DeveloperProductConfig,
    GamePassConfig,
    PlaceConfig,
    PrivateServerCost,
    RbxSyncConfig,
    UniverseConfig,
)
from rbxsync.contracts.exceptions import (
    AssetOperationError,
    AuthenticationError,
    BadgePaymentSourceError,
    ConfigError,
    LedgerError,
    RbxSyncError,
    RemoteError,
    SyncError,
)
from rbxsync.contracts.gateway import (
    AssetUpload,
    IconFile,
    ListPage,
    OperationStatus,
    ResourceGateway,
    UniverseGateway,
)
from rbxsync.contracts.ledger import Ledger, ResourceState, UniverseState
from rbxsync.contracts.resource import ResourceKind
from rbxsync.contracts.sync import KindSummary, PublishResult, ResourceAction, ResourceOutcome, SyncResult

__all__ = [
    "AssetOperationError",
    "AssetUpload",
    "AuthenticationError",
    "BadgeConfig",
    "BadgePaymentSourceError",
    "ConfigError",
    "CreatorConfig",
    "DeclaredResource",
    "DeveloperProductConfig",
    "GamePassConfig",
    "IconFile",
    "KindSummary",
    "Ledger",
    "LedgerError",
    "ListPage",
    "OperationStatus",
    "PlaceConfig",
    "PrivateServerCost",
    "PublishResult",
    "RbxSyncConfig",
    "RbxSyncError",
    "RemoteError",
    "ResourceAction",
    "ResourceGateway",
    "ResourceKind",
    "ResourceOutcome",
    "ResourceState",
    "SyncError",
    "SyncResult",
    "UniverseConfig",
    "UniverseGateway",
    "UniverseState",
]
