"""Core sync pipeline engine."""

from __future__ import annotations

import logging

from rbxsync.contracts.config import RbxSyncConfig
from rbxsync.contracts.gateway import ResourceGateway, UniverseGateway
from rbxsync.contracts.ledger import Ledger
from rbxsync.contracts.sync import ResourceOutcome, SyncResult
from rbxsync.engine.assets import AssetMaterializer
from rbxsync.engine.kinds import DESCRIPTORS
from rbxsync.engine.progress import NullSyncProgress, SyncProgress
from rbxsync.engine.reconciler import ResourceReconciler
from rbxsync.engine.universe import UniverseReconciler

_LOG = logging.getLogger(__name__)

_UNIVERSE_PHASE = "Universe"


class SyncEngine:
    """Reconciles the universe singleton, then every resource kind in order.

    The ledger passed in is mutated as remote calls succeed; persisting it is
    left to the caller.
    """

    def __init__(
        self,
        gateway: ResourceGateway,
        config: RbxSyncConfig,
        ledger: Ledger,
        *,
        universe_gateway: UniverseGateway | None = None,
        materializer: AssetMaterializer | None = None,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._ledger = ledger
        self._dry_run = dry_run
        self._progress: SyncProgress = progress or NullSyncProgress()
        self._universe = UniverseReconciler(universe_gateway, ledger, dry_run=dry_run)
        self._resources = ResourceReconciler(
            gateway,
            ledger,
            config,
            materializer=materializer or AssetMaterializer(gateway, creator=config.creator),
            dry_run=dry_run,
            progress=self._progress,
        )

    async def sync(self) -> SyncResult:
        universe_outcome = await self._sync_universe()

        outcomes: list[ResourceOutcome] = []
        for descriptor in DESCRIPTORS:
            outcomes.extend(await self._resources.reconcile_kind(descriptor))

        return SyncResult(
            universe=universe_outcome,
            outcomes=outcomes,
            ledger=self._ledger,
            dry_run=self._dry_run,
        )

    async def _sync_universe(self) -> ResourceOutcome | None:
        self._progress.phase_start(_UNIVERSE_PHASE, total=1)
        try:
            outcome = await self._universe.reconcile(self._config.universe)
            self._progress.item_done(_UNIVERSE_PHASE)
            self._progress.phase_done(_UNIVERSE_PHASE)
            return outcome
        except BaseException as exc:
            self._progress.phase_error(_UNIVERSE_PHASE, exc)
            raise
