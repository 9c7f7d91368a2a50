"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from rbxsync.contracts.exceptions import (
    AssetOperationError,
    BadgePaymentSourceError,
    ConfigError,
    LedgerError,
    RemoteError,
    SyncError,
)


def main(argv: list[str] | None = None) -> int:
    import rbxsync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        cli.load_environment(args.config)
        if args.command == "run":
            cli.asyncio.run(cli._run_sync(args))
        elif args.command == "publish":
            cli.asyncio.run(cli._run_publish(args))
        elif args.command == "validate":
            cli.asyncio.run(cli._run_validate(args))
        elif args.command == "export":
            cli.asyncio.run(cli._run_export(args))
        return 0
    except (ConfigError, LedgerError, BadgePaymentSourceError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except RemoteError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except (SyncError, AssetOperationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
