"""Credential resolver factory."""

from __future__ import annotations

from rbxsync.auth.base import CredentialResolver
from rbxsync.auth.resolvers.env import EnvCredentialResolver
from rbxsync.auth.resolvers.static import StaticCredentialResolver

API_KEY_ENV = "ROBLOX_API_KEY"
COOKIE_ENV = "ROBLOX_COOKIE"


def create_api_key_resolver(api_key: str | None = None) -> CredentialResolver:
    """Open Cloud API key: an explicit value wins over ``ROBLOX_API_KEY``."""
    if api_key is not None:
        return StaticCredentialResolver(value=api_key, label="API key")
    return EnvCredentialResolver(variable=API_KEY_ENV)


def create_cookie_resolver(cookie: str | None = None) -> CredentialResolver:
    """Session cookie for universe configuration: explicit value or ``ROBLOX_COOKIE``."""
    if cookie is not None:
        return StaticCredentialResolver(value=cookie, label="session cookie")
    return EnvCredentialResolver(variable=COOKIE_ENV)
