"""Generic reconciliation of one resource kind."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from rbxsync.contracts.config import DeclaredResource, RbxSyncConfig
from rbxsync.contracts.exceptions import RemoteError, SyncError
from rbxsync.contracts.gateway import IconFile, ResourceGateway
from rbxsync.contracts.ledger import Ledger, ResourceState
from rbxsync.contracts.sync import KindSummary, ResourceAction, ResourceOutcome
from rbxsync.engine.assets import AssetMaterializer, IconCandidate
from rbxsync.engine.kinds import KindDescriptor, RemoteRecord
from rbxsync.engine.preflight import check_unique_names
from rbxsync.engine.progress import NullSyncProgress, SyncProgress

_LOG = logging.getLogger(__name__)


class ResourceReconciler:
    """Applies declared resources of any kind against the ledger and remote listing.

    Identity is resolved ledger first, then remote listing (adoption), else the
    resource is created. Changes are detected against the ledger only.
    """

    def __init__(
        self,
        gateway: ResourceGateway,
        ledger: Ledger,
        config: RbxSyncConfig,
        *,
        materializer: AssetMaterializer,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
    ) -> None:
        self._gateway = gateway
        self._ledger = ledger
        self._config = config
        self._materializer = materializer
        self._dry_run = dry_run
        self._progress: SyncProgress = progress or NullSyncProgress()

    async def reconcile_kind(self, descriptor: KindDescriptor) -> list[ResourceOutcome]:
        declared = descriptor.declared(self._config)
        check_unique_names(descriptor, declared)
        _LOG.info("Syncing %s...", descriptor.plural)

        outcomes: list[ResourceOutcome] = []
        self._progress.phase_start(descriptor.plural, total=len(declared))
        try:
            if declared:
                remote_index = await self.remote_index(descriptor)
                for item in declared:
                    outcomes.append(await self._reconcile_one(descriptor, item, remote_index))
                    self._progress.item_done(descriptor.plural)
            self._progress.phase_done(descriptor.plural)
        except BaseException as exc:
            self._progress.phase_error(descriptor.plural, exc)
            raise

        summary = KindSummary.from_outcomes(outcomes)
        _LOG.info(
            "%s Summary: %d created, %d updated, %d skipped (unchanged)",
            descriptor.plural,
            summary.created,
            summary.updated,
            summary.skipped,
        )
        return outcomes

    async def remote_index(self, descriptor: KindDescriptor) -> dict[str, RemoteRecord]:
        """Case-folded name -> listing entry, across every listing page.

        A dry run treats a failed listing as empty so previews work without
        live credentials.
        """
        try:
            records = await list_all(self._gateway, descriptor)
        except RemoteError as exc:
            if not self._dry_run:
                raise
            _LOG.warning("Dry run: failed to list %s, continuing with an empty listing: %s", descriptor.plural, exc)
            return {}

        index: dict[str, RemoteRecord] = {}
        for record in records:
            index.setdefault(record.name.casefold(), record)
        return index

    async def _reconcile_one(
        self,
        descriptor: KindDescriptor,
        declared: DeclaredResource,
        remote_index: dict[str, RemoteRecord],
    ) -> ResourceOutcome:
        remote_id: int | None = None
        entry: ResourceState | None = None
        ledger_hit = self._ledger.find_by_name(descriptor.kind, declared.name)
        if ledger_hit is not None:
            remote_id, entry = ledger_hit
        else:
            remote = remote_index.get(declared.name.casefold())
            if remote is not None:
                remote_id = remote.remote_id
                _LOG.debug("Adopting existing %s '%s' (ID: %s)", descriptor.label, remote.name, remote_id)

        icon: IconCandidate | None = None
        if declared.icon is not None:
            icon = self._materializer.inspect(
                self._config.icon_path(declared.icon), entry, mode=descriptor.icon_mode
            )

        changed = descriptor.changed_fields(declared, entry)
        if icon is not None and icon.changed:
            changed.append("icon")

        if remote_id is None:
            return await self._create(descriptor, declared, icon)

        outcome = ResourceOutcome(
            kind=descriptor.kind,
            name=declared.name,
            action=ResourceAction.SKIP,
            remote_id=remote_id,
            changed_fields=changed,
        )
        if not changed:
            _LOG.info("  [SKIP] %s '%s' (ID: %s) - no changes detected", descriptor.label, declared.name, remote_id)
            return outcome
        if self._dry_run:
            _LOG.info(
                "  [UPDATE] %s '%s' (ID: %s) - would update: %s",
                descriptor.label,
                declared.name,
                remote_id,
                ", ".join(changed),
            )
            return outcome.model_copy(update={"action": ResourceAction.UPDATE})

        icon_changed = icon is not None and icon.changed
        fields, icon_file, icon = await self._request_payload(
            descriptor, declared, icon, creating=False, send_icon=icon_changed
        )
        await self._gateway.update(descriptor.kind, remote_id, fields, icon=icon_file)
        self._ledger.update(descriptor.kind, remote_id, self._snapshot(descriptor, declared, icon, entry))
        _LOG.info(
            "  [UPDATED] %s '%s' (ID: %s) - updated: %s",
            descriptor.label,
            declared.name,
            remote_id,
            ", ".join(changed),
        )
        return outcome.model_copy(update={"action": ResourceAction.UPDATED})

    async def _create(
        self,
        descriptor: KindDescriptor,
        declared: DeclaredResource,
        icon: IconCandidate | None,
    ) -> ResourceOutcome:
        created_with = [spec.name for spec in descriptor.fields if getattr(declared, spec.name) is not None]
        if icon is not None:
            created_with.append("icon")
        outcome = ResourceOutcome(
            kind=descriptor.kind,
            name=declared.name,
            action=ResourceAction.CREATE,
            changed_fields=created_with,
        )
        if self._dry_run:
            _LOG.info(
                "  [CREATE] %s '%s' - would create with: %s",
                descriptor.label,
                declared.name,
                ", ".join(created_with),
            )
            return outcome

        fields, icon_file, icon = await self._request_payload(
            descriptor, declared, icon, creating=True, send_icon=icon is not None
        )
        try:
            record = await self._gateway.create(descriptor.kind, fields, icon=icon_file)
        except RemoteError as exc:
            if descriptor.translate_create_error is not None:
                translated = descriptor.translate_create_error(exc, declared.name)
                if translated is not None:
                    raise translated from exc
            raise

        new_id = descriptor.record_id(record)
        if new_id is None:
            raise SyncError(f"Created {descriptor.label.lower()} '{declared.name}' has no ID in response: {record}")
        self._ledger.update(descriptor.kind, new_id, self._snapshot(descriptor, declared, icon, None))
        _LOG.info(
            "  [CREATED] %s '%s' (ID: %s) - created with: %s",
            descriptor.label,
            declared.name,
            new_id,
            ", ".join(created_with),
        )
        return outcome.model_copy(update={"action": ResourceAction.CREATED, "remote_id": new_id})

    async def _request_payload(
        self,
        descriptor: KindDescriptor,
        declared: DeclaredResource,
        icon: IconCandidate | None,
        *,
        creating: bool,
        send_icon: bool,
    ) -> tuple[dict[str, Any], IconFile | None, IconCandidate | None]:
        fields = descriptor.wire_fields(declared, creating=creating)
        if creating and descriptor.create_extras is not None:
            fields.update(descriptor.create_extras(self._config))

        icon_file: IconFile | None = None
        if icon is not None and send_icon:
            if descriptor.icon_mode == "asset":
                icon = await self._materializer.materialize(icon)
                fields["iconAssetId"] = icon.asset_id
            else:
                icon_file = icon.as_file()
        return fields, icon_file, icon

    @staticmethod
    def _snapshot(
        descriptor: KindDescriptor,
        declared: DeclaredResource,
        icon: IconCandidate | None,
        entry: ResourceState | None,
    ) -> ResourceState:
        if icon is not None:
            return descriptor.snapshot(declared, icon_hash=icon.content_hash, icon_asset_id=icon.asset_id)
        if entry is not None:
            return descriptor.snapshot(declared, icon_hash=entry.icon_hash, icon_asset_id=entry.icon_asset_id)
        return descriptor.snapshot(declared, icon_hash=None, icon_asset_id=None)


async def list_all(gateway: ResourceGateway, descriptor: KindDescriptor) -> list[RemoteRecord]:
    """Follow listing cursors until exhausted, normalizing every record."""
    records: list[RemoteRecord] = []
    seen_cursors: set[str] = set()
    cursor: str | None = None
    while True:
        page = await gateway.list_page(descriptor.kind, cursor)
        records.extend(_normalize(descriptor, page.records))
        cursor = page.next_cursor
        if not cursor or cursor in seen_cursors:
            return records
        seen_cursors.add(cursor)


def _normalize(descriptor: KindDescriptor, raw_records: Sequence[dict[str, Any]]) -> list[RemoteRecord]:
    normalized: list[RemoteRecord] = []
    for raw in raw_records:
        record = descriptor.extract(raw)
        if record is not None:
            normalized.append(record)
    return normalized
