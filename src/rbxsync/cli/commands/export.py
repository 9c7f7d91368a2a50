"""Export command."""

from __future__ import annotations

import argparse
from pathlib import Path


async def run_export(args: argparse.Namespace) -> Path:
    import rbxsync.cli as cli

    config = cli.load_config(args.config)
    output = Path(args.output) if args.output else None
    target = await cli.RbxSync.from_config(config).export(output, lua=args.lua)
    print(f"Exported to {target}")
    return target


__all__ = ["run_export"]
