"""Publish command formatting."""

from __future__ import annotations

import argparse

from rbxsync.cli.common import format_ids
from rbxsync.contracts.sync import PublishResult


def format_publish_summary(result: PublishResult) -> str:
    lines = [
        "",
        "rbxsync - publish complete",
        "",
        f"  Published: {format_ids(result.published)}",
        f"  Failed:    {format_ids(result.failed)}",
        f"  Skipped:   {format_ids(result.skipped)}",
        "",
    ]
    return "\n".join(lines)


async def run_publish(args: argparse.Namespace) -> PublishResult:
    import rbxsync.cli as cli

    config = cli.load_config(args.config)
    result = await cli.RbxSync.from_config(config).publish()
    print(cli._format_publish_summary(result))
    return result


__all__ = ["format_publish_summary", "run_publish"]
