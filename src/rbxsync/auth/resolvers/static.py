"""Static credential resolver."""

from __future__ import annotations

from dataclasses import dataclass

from rbxsync.auth.base import CredentialResolver
from rbxsync.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticCredentialResolver(CredentialResolver):
    value: str
    label: str = "credential"

    async def resolve(self) -> str:
        resolved = self.value.strip()
        if not resolved:
            raise AuthenticationError(f"Static {self.label} is empty")
        return resolved
