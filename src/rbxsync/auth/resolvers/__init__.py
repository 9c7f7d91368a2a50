"""Credential resolver implementations."""

from rbxsync.auth.resolvers.env import EnvCredentialResolver
from rbxsync.auth.resolvers.static import StaticCredentialResolver

__all__ = ["EnvCredentialResolver", "StaticCredentialResolver"]
