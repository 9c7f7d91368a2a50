"""Lock-file contracts: the last successfully applied state."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rbxsync.contracts.resource import ResourceKind


class ResourceState(BaseModel):
    """Snapshot of one resource as last applied.

    ``icon_asset_id`` is only meaningful together with the ``icon_hash`` that
    produced it.
    """

    name: str
    description: str | None = None
    price: int | None = None
    is_for_sale: bool | None = None
    is_active: bool | None = None
    is_enabled: bool | None = None
    icon_hash: str | None = None
    icon_asset_id: int | None = None


class UniverseState(BaseModel):
    name: str | None = None
    description: str | None = None
    genre: str | None = None
    playable_devices: list[str] | None = None
    max_players: int | None = None
    private_server_cost: str | None = None


class Ledger(BaseModel):
    universe: UniverseState | None = None
    game_passes: dict[int, ResourceState] = Field(default_factory=dict)
    developer_products: dict[int, ResourceState] = Field(default_factory=dict)
    badges: dict[int, ResourceState] = Field(default_factory=dict)

    def entries(self, kind: ResourceKind) -> dict[int, ResourceState]:
        entries: dict[int, ResourceState] = getattr(self, kind.value)
        return entries

    def find_by_name(self, kind: ResourceKind, name: str) -> tuple[int, ResourceState] | None:
        """Case-insensitive lookup; the first match wins."""
        wanted = name.casefold()
        for remote_id, state in self.entries(kind).items():
            if state.name.casefold() == wanted:
                return remote_id, state
        return None

    def update(self, kind: ResourceKind, remote_id: int, state: ResourceState) -> None:
        """Replace the entry at *remote_id* wholesale."""
        self.entries(kind)[remote_id] = state

    def update_universe(self, state: UniverseState) -> None:
        self.universe = state

    def is_empty(self) -> bool:
        return self.universe is None and not any(self.entries(kind) for kind in ResourceKind)
