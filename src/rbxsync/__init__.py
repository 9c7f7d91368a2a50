"""Public API surface for rbxsync."""

__version__ = "0.1.0"

from rbxsync.config import load_config, load_environment
from rbxsync.contracts.config import (
    BadgeConfig,
    CreatorConfig,
    DeveloperProductConfig,
    GamePassConfig,
    PlaceConfig,
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
from rbxsync.contracts.gateway import ResourceGateway, UniverseGateway
from rbxsync.contracts.ledger import Ledger, ResourceState, UniverseState
from rbxsync.contracts.resource import ResourceKind
from rbxsync.contracts.sync import KindSummary, PublishResult, ResourceAction, ResourceOutcome, SyncResult
from rbxsync.engine.progress import SyncProgress
from rbxsync.persistence import load_ledger, save_ledger
from rbxsync.sdk import RbxSync

__all__ = [
    "AssetOperationError",
    "AuthenticationError",
    "BadgeConfig",
    "BadgePaymentSourceError",
    "ConfigError",
    "CreatorConfig",
    "DeveloperProductConfig",
    "GamePassConfig",
    "KindSummary",
    "Ledger",
    "LedgerError",
    "PlaceConfig",
    "PublishResult",
    "RbxSync",
    "RbxSyncConfig",
    "RbxSyncError",
    "RemoteError",
    "ResourceAction",
    "ResourceGateway",
    "ResourceKind",
    "ResourceOutcome",
    "ResourceState",
    "SyncProgress",
    "SyncResult",
    "UniverseConfig",
    "UniverseGateway",
    "UniverseState",
    "load_config",
    "load_environment",
    "load_ledger",
    "save_ledger",
]
