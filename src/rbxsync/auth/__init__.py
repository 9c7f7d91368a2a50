"""Credential resolution."""

from rbxsync.auth.base import CredentialResolver
from rbxsync.auth.factory import API_KEY_ENV, COOKIE_ENV, create_api_key_resolver, create_cookie_resolver
from rbxsync.auth.resolvers import EnvCredentialResolver, StaticCredentialResolver

__all__ = [
    "API_KEY_ENV",
    "COOKIE_ENV",
    "CredentialResolver",
    "EnvCredentialResolver",
    "StaticCredentialResolver",
    "create_api_key_resolver",
    "create_cookie_resolver",
]
