"""Exception hierarchy for rbxsync."""

from __future__ import annotations


class RbxSyncError(Exception):
    """Base exception for all rbxsync errors."""


class ConfigError(RbxSyncError):
    """Declared configuration is missing, malformed, or inconsistent."""


class LedgerError(RbxSyncError):
    """Reading or writing the lock file failed."""


class RemoteError(RbxSyncError):
    """Remote service rejected a request or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthenticationError(RemoteError):
    """Credentials are missing or were rejected."""


class AssetOperationError(RbxSyncError):
    """Asset upload failed or its operation never completed."""


class BadgePaymentSourceError(RbxSyncError):
    """Badge creation was rejected because no payment source is configured."""

    remediation = (
        "Creating badges costs Robux. Add one of the following to your rbxsync.yml:\n"
        '  badge_payment_source: "user"   # pay from your user account\n'
        '  badge_payment_source: "group"  # pay from group funds'
    )

    def __init__(self, badge_name: str) -> None:
        super().__init__(
            f"Badge '{badge_name}' could not be created: a payment source is required.\n{self.remediation}"
        )
        self.badge_name = badge_name


class SyncError(RbxSyncError):
    """Engine-level synchronization failure."""
