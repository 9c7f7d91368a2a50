"""Remote gateway implementations."""

from rbxsync.providers.roblox import RobloxGateway, RobloxUniverseGateway

__all__ = ["RobloxGateway", "RobloxUniverseGateway"]
