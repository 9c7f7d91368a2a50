"""Run command formatting."""

from __future__ import annotations

import argparse

from rbxsync.cli.progress.rich import RichSyncProgress
from rbxsync.contracts.resource import ResourceKind
from rbxsync.contracts.sync import ResourceAction, ResourceOutcome, SyncResult
from rbxsync.engine.kinds import descriptor_for
from rbxsync.persistence import ledger_path

_ACTION_TAGS = {
    ResourceAction.CREATE: "CREATE",
    ResourceAction.CREATED: "CREATED",
    ResourceAction.UPDATE: "UPDATE",
    ResourceAction.UPDATED: "UPDATED",
    ResourceAction.SKIP: "SKIP",
}


def _format_outcome(outcome: ResourceOutcome) -> str:
    line = f"    [{_ACTION_TAGS[outcome.action]}] '{outcome.name}'"
    if outcome.remote_id is not None:
        line += f" (ID: {outcome.remote_id})"
    if outcome.action is not ResourceAction.SKIP and outcome.changed_fields:
        line += f" - {', '.join(outcome.changed_fields)}"
    return line


def format_run_summary(result: SyncResult, *, lock_file: str) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = ["", f"rbxsync - run complete ({mode})", ""]

    if result.universe is None:
        lines.append("  Universe:            no settings declared")
    else:
        lines.append(f"  Universe:            {result.universe.action.value}")
        if result.universe.action is not ResourceAction.SKIP:
            lines.append(f"    changed: {', '.join(result.universe.changed_fields)}")

    for kind in ResourceKind:
        label = descriptor_for(kind).plural
        summary = result.summary(kind)
        lines.append(
            f"  {label + ':':<20} {summary.created} created, {summary.updated} updated, {summary.skipped} skipped"
        )
        lines.extend(_format_outcome(outcome) for outcome in result.outcomes_for(kind))

    lines.append("")
    if result.dry_run:
        lines.append("  [dry-run] No changes were made")
    else:
        lines.append(f"  Lock file: {lock_file}")
    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace) -> SyncResult:
    import rbxsync.cli as cli

    config = cli.load_config(args.config)

    if not args.verbose:
        with RichSyncProgress() as progress:
            sdk = cli.RbxSync.from_config(config, progress=progress)
            result = await sdk.run(dry_run=args.dry_run)
    else:
        sdk = cli.RbxSync.from_config(config)
        result = await sdk.run(dry_run=args.dry_run)

    print(cli._format_run_summary(result, lock_file=str(ledger_path(config.project_root))))
    return result


__all__ = ["format_run_summary", "run_sync"]
