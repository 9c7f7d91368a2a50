"""Engine module exports."""

from rbxsync.engine.assets import AssetMaterializer
from rbxsync.engine.engine import SyncEngine
from rbxsync.engine.progress import NullSyncProgress, SyncProgress
from rbxsync.engine.reconciler import ResourceReconciler
from rbxsync.engine.universe import UniverseReconciler

__all__ = [
    "AssetMaterializer",
    "NullSyncProgress",
    "ResourceReconciler",
    "SyncEngine",
    "SyncProgress",
    "UniverseReconciler",
]
