"""Lock-file persistence helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rbxsync.contracts.exceptions import LedgerError
from rbxsync.contracts.ledger import Ledger

LEDGER_FILENAME = "rbxsync-lock.yml"


def ledger_path(root: Path) -> Path:
    return root / LEDGER_FILENAME


def load_ledger(root: Path) -> Ledger:
    """Load the lock file under *root*; a missing file is an empty ledger."""
    path = ledger_path(root)
    if not path.exists():
        return Ledger()
    try:
        payload: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
        return Ledger.model_validate(payload or {})
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        raise LedgerError(f"invalid lock file: {path}") from exc


def save_ledger(ledger: Ledger, root: Path) -> Path:
    """Serialize the whole ledger, overwriting any previous lock file."""
    path = ledger_path(root)
    payload = ledger.model_dump(exclude_none=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True), encoding="utf-8")
    except OSError as exc:
        raise LedgerError(f"failed to persist lock file: {path}") from exc
    return path
