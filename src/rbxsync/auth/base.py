"""Credential resolver interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CredentialResolver(ABC):
    @abstractmethod
    async def resolve(self) -> str:
        """Resolve and return a credential value."""
