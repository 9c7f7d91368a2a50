"""Lock-file persistence."""

from rbxsync.persistence.ledger import LEDGER_FILENAME, ledger_path, load_ledger, save_ledger

__all__ = ["LEDGER_FILENAME", "ledger_path", "load_ledger", "save_ledger"]
