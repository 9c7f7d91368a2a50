"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from rbxsync.contracts.config import DEFAULT_CONFIG_FILENAME


def _package_version() -> str:
    try:
        return version("rbxsync")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=f"./{DEFAULT_CONFIG_FILENAME}",
        help=f"Path to {DEFAULT_CONFIG_FILENAME}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rbxsync")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Sync universe settings, passes, products and badges")
    _add_common_arguments(run_parser)
    run_parser.add_argument("--dry-run", action="store_true", help="Preview changes without applying them")

    publish_parser = subparsers.add_parser("publish", help="Publish places marked with publish: true")
    _add_common_arguments(publish_parser)

    validate_parser = subparsers.add_parser("validate", help="Check the config without touching the network")
    _add_common_arguments(validate_parser)

    export_parser = subparsers.add_parser("export", help="Export remote resources to a Luau module")
    _add_common_arguments(export_parser)
    export_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output file path (default: config.luau next to the config file)",
    )
    export_parser.add_argument("--lua", action="store_true", help="Write config.lua instead of config.luau")

    return parser


__all__ = ["build_parser"]
