"""Validate command."""

from __future__ import annotations

import argparse


def format_validate_summary(warnings: list[str]) -> str:
    lines = ["", "rbxsync - config is valid", ""]
    for warning in warnings:
        lines.append(f"  warning: {warning}")
    if warnings:
        lines.append("")
    return "\n".join(lines)


async def run_validate(args: argparse.Namespace) -> list[str]:
    import rbxsync.cli as cli

    config = cli.load_config(args.config)
    warnings = await cli.RbxSync.from_config(config).validate()
    print(cli._format_validate_summary(warnings))
    return warnings


__all__ = ["format_validate_summary", "run_validate"]
