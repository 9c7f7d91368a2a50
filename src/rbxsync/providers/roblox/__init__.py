"""Roblox gateway implementations."""

from rbxsync.providers.roblox.gateway import RobloxGateway
from rbxsync.providers.roblox.universe import RobloxUniverseGateway

__all__ = ["RobloxGateway", "RobloxUniverseGateway"]
