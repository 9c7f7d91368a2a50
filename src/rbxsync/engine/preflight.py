"""Pre-flight validation that needs no network access."""

from __future__ import annotations

from collections.abc import Sequence

from rbxsync.contracts.config import DeclaredResource, RbxSyncConfig
from rbxsync.contracts.exceptions import ConfigError
from rbxsync.contracts.ledger import Ledger
from rbxsync.engine.assets import needs_upload
from rbxsync.engine.kinds import DESCRIPTORS, KindDescriptor
from rbxsync.hashing import file_hash


def check_unique_names(descriptor: KindDescriptor, declared: Sequence[DeclaredResource]) -> None:
    """Reject names that collide case-insensitively within one kind."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for item in declared:
        folded = item.name.casefold()
        if folded in seen:
            duplicates.append(item.name)
        else:
            seen.add(folded)
    if duplicates:
        raise ConfigError(
            f"Duplicate {descriptor.label.lower()} names found (names must be unique, case-insensitive): "
            + ", ".join(repr(name) for name in duplicates)
        )


def pending_uploads(config: RbxSyncConfig, ledger: Ledger) -> list[tuple[KindDescriptor, str]]:
    """Asset-backed icons whose bytes are not yet recorded with an asset id."""
    pending: list[tuple[KindDescriptor, str]] = []
    for descriptor in DESCRIPTORS:
        if descriptor.icon_mode != "asset":
            continue
        for item in descriptor.declared(config):
            if item.icon is None:
                continue
            hit = ledger.find_by_name(descriptor.kind, item.name)
            entry = hit[1] if hit is not None else None
            if needs_upload(file_hash(config.icon_path(item.icon)), entry):
                pending.append((descriptor, item.name))
    return pending


def run_preflight(config: RbxSyncConfig, ledger: Ledger, *, dry_run: bool) -> None:
    """Validate declared resources before the first remote call.

    Raises:
        ConfigError: duplicate names, missing icon files, or an upload that
            would be needed without a configured creator.
    """
    for descriptor in DESCRIPTORS:
        declared = descriptor.declared(config)
        check_unique_names(descriptor, declared)
        for item in declared:
            if item.icon is None:
                continue
            icon_path = config.icon_path(item.icon)
            if not icon_path.is_file():
                raise ConfigError(f"Icon file not found for {descriptor.label} '{item.name}': {icon_path}")

    if dry_run or config.creator is not None:
        return
    pending = pending_uploads(config, ledger)
    if pending:
        names = ", ".join(f"{descriptor.label} '{name}'" for descriptor, name in pending)
        raise ConfigError(f"Creator configuration is required for asset uploads (icons to upload: {names})")
