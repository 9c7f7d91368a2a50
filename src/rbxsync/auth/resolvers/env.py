"""Environment credential resolver."""

from __future__ import annotations

import os
from dataclasses import dataclass

from rbxsync.auth.base import CredentialResolver
from rbxsync.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class EnvCredentialResolver(CredentialResolver):
    variable: str

    async def resolve(self) -> str:
        value = (os.getenv(self.variable) or "").strip()
        if not value:
            raise AuthenticationError(f"{self.variable} is not set or empty")
        return value
