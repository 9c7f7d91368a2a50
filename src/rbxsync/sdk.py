"""SDK composition root for rbxsync."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from pathlib import Path

from rbxsync.auth import CredentialResolver, create_api_key_resolver, create_cookie_resolver
from rbxsync.contracts.config import RbxSyncConfig
from rbxsync.contracts.exceptions import AuthenticationError, ConfigError, RemoteError
from rbxsync.contracts.gateway import ResourceGateway, UniverseGateway
from rbxsync.contracts.resource import ResourceKind
from rbxsync.contracts.sync import PublishResult, SyncResult
from rbxsync.engine import SyncEngine
from rbxsync.engine.kinds import DESCRIPTORS, RemoteRecord
from rbxsync.engine.preflight import run_preflight
from rbxsync.engine.progress import SyncProgress
from rbxsync.engine.reconciler import list_all
from rbxsync.export import default_filename, render_luau
from rbxsync.persistence import load_ledger, save_ledger
from rbxsync.providers.roblox import RobloxGateway, RobloxUniverseGateway

_LOG = logging.getLogger(__name__)


class RbxSync:
    """rbxsync SDK public API.

    Gateways may be injected; otherwise they are built from resolved
    credentials when an operation needs them.
    """

    def __init__(
        self,
        *,
        config: RbxSyncConfig,
        gateway: ResourceGateway | None = None,
        universe_gateway: UniverseGateway | None = None,
        api_key_resolver: CredentialResolver | None = None,
        cookie_resolver: CredentialResolver | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._gateway = gateway
        self._universe_gateway = universe_gateway
        self._api_key_resolver = api_key_resolver or create_api_key_resolver()
        self._cookie_resolver = cookie_resolver or create_cookie_resolver()
        self._progress = progress

    @classmethod
    def from_config(cls, config: RbxSyncConfig, *, progress: SyncProgress | None = None) -> RbxSync:
        return cls(config=config, progress=progress)

    @property
    def config(self) -> RbxSyncConfig:
        return self._config

    async def run(self, *, dry_run: bool = False) -> SyncResult:
        """Reconcile the universe and every resource kind.

        The lock file is written once after a successful apply run and never
        on dry runs or failures.
        """
        ledger = load_ledger(self._config.project_root)
        run_preflight(self._config, ledger, dry_run=dry_run)

        async with AsyncExitStack() as stack:
            gateway = await stack.enter_async_context(await self._resolve_gateway(dry_run=dry_run))
            universe_gateway = await self._resolve_universe_gateway(dry_run=dry_run)
            if universe_gateway is not None:
                universe_gateway = await stack.enter_async_context(universe_gateway)

            result = await SyncEngine(
                gateway,
                self._config,
                ledger,
                universe_gateway=universe_gateway,
                dry_run=dry_run,
                progress=self._progress,
            ).sync()

        if not dry_run:
            path = save_ledger(ledger, self._config.project_root)
            _LOG.info("Lock file written: %s", path)
        return result

    async def publish(self) -> PublishResult:
        """Publish every place marked ``publish: true``.

        A failing place is logged and reported; the remaining places are
        still attempted.
        """
        result = PublishResult()
        targets = []
        for place in self._config.places:
            if place.publish:
                targets.append(place)
            else:
                result.skipped.append(place.place_id)
        if not targets:
            _LOG.info("No places marked for publishing")
            return result

        gateway = await self._resolve_gateway(dry_run=False)
        async with gateway:
            for place in targets:
                _LOG.info("Publishing place %s from %s", place.place_id, place.file_path)
                try:
                    content = place.file_path.read_bytes()
                except OSError as exc:
                    _LOG.error("Failed to read place file for %s: %s", place.place_id, exc)
                    result.failed.append(place.place_id)
                    continue
                try:
                    await gateway.publish_place(place.place_id, content)
                except RemoteError as exc:
                    _LOG.error("Failed to publish place %s: %s", place.place_id, exc)
                    result.failed.append(place.place_id)
                    continue
                _LOG.info("Published place %s", place.place_id)
                result.published.append(place.place_id)
        return result

    async def export(self, output: Path | None = None, *, lua: bool = False) -> Path:
        """Write every remote resource of the universe to a Luau module."""
        gateway = await self._resolve_gateway(dry_run=False)
        records: dict[ResourceKind, list[RemoteRecord]] = {}
        async with gateway:
            for descriptor in DESCRIPTORS:
                records[descriptor.kind] = await list_all(gateway, descriptor)

        target = output if output is not None else self._config.project_root / default_filename(lua=lua)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(render_luau(records), encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"failed writing export file: {target}") from exc
        _LOG.info("Exported %d resources to %s", sum(len(items) for items in records.values()), target)
        return target

    async def validate(self) -> list[str]:
        """Run every local check without touching the network.

        Returns warnings; hard failures raise ``ConfigError`` or ``LedgerError``.
        """
        ledger = load_ledger(self._config.project_root)
        run_preflight(self._config, ledger, dry_run=False)

        warnings: list[str] = []
        if self._gateway is None and not await self._credential_available(self._api_key_resolver):
            warnings.append("ROBLOX_API_KEY is not set; run, publish and export will fail")
        if (
            self._config.universe.has_settings()
            and self._universe_gateway is None
            and not await self._credential_available(self._cookie_resolver)
        ):
            warnings.append("ROBLOX_COOKIE is not set; universe settings cannot be updated")
        for place in self._config.places:
            if place.publish and not place.file_path.is_file():
                warnings.append(f"Place file not found for {place.place_id}: {place.file_path}")
        return warnings

    # ------------------------------------------------------------------
    # Gateway resolution
    # ------------------------------------------------------------------

    async def _resolve_gateway(self, *, dry_run: bool) -> ResourceGateway:
        if self._gateway is not None:
            return self._gateway
        try:
            api_key = await self._api_key_resolver.resolve()
        except AuthenticationError as exc:
            if not dry_run:
                raise
            _LOG.warning("Dry run: %s; remote listings will be treated as empty", exc)
            api_key = ""
        return RobloxGateway(universe_id=self._config.universe.id, api_key=api_key)

    async def _resolve_universe_gateway(self, *, dry_run: bool) -> UniverseGateway | None:
        if not self._config.universe.has_settings():
            return None
        if self._universe_gateway is not None:
            return self._universe_gateway
        try:
            cookie = await self._cookie_resolver.resolve()
        except AuthenticationError as exc:
            if dry_run:
                _LOG.warning("Dry run: %s; universe settings will only be previewed", exc)
            else:
                _LOG.debug("No session cookie available: %s", exc)
            return None
        return RobloxUniverseGateway(universe_id=self._config.universe.id, cookie=cookie)

    @staticmethod
    async def _credential_available(resolver: CredentialResolver) -> bool:
        try:
            await resolver.resolve()
        except AuthenticationError:
            return False
        return True
