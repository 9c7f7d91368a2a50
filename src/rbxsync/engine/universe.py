"""Universe configuration reconciliation.

The universe always exists, so there is no identity resolution: the desired
settings are compared with the recorded singleton and pushed as one patch.
"""

from __future__ import annotations

import logging
from typing import Any

from rbxsync.contracts.config import UniverseConfig
from rbxsync.contracts.exceptions import ConfigError
from rbxsync.contracts.gateway import UniverseGateway
from rbxsync.contracts.ledger import Ledger, UniverseState
from rbxsync.contracts.sync import ResourceAction, ResourceOutcome

_LOG = logging.getLogger(__name__)

DEVICE_CODES: dict[str, int] = {
    "computer": 1,
    "phone": 2,
    "tablet": 3,
    "console": 4,
    "vr": 5,
}

_STATE_FIELDS = ("name", "description", "genre", "playable_devices", "max_players", "private_server_cost")


def encode_devices(devices: list[str]) -> list[int]:
    """Map device names to platform codes. Unknown names are dropped."""
    codes: list[int] = []
    for device in devices:
        code = DEVICE_CODES.get(device.strip().lower())
        if code is None:
            _LOG.debug("Ignoring unknown playable device: %s", device)
            continue
        codes.append(code)
    return codes


def desired_universe_state(universe: UniverseConfig) -> UniverseState:
    return UniverseState(
        name=universe.name,
        description=universe.description,
        genre=universe.genre,
        playable_devices=universe.playable_devices,
        max_players=universe.max_players,
        private_server_cost=(
            universe.private_server_cost.ledger_value() if universe.private_server_cost is not None else None
        ),
    )


def encode_universe_settings(universe: UniverseConfig) -> dict[str, Any]:
    """Build the configuration patch body for every declared setting."""
    settings: dict[str, Any] = {}
    if universe.name is not None:
        settings["name"] = universe.name
    if universe.description is not None:
        settings["description"] = universe.description
    if universe.genre is not None:
        settings["genre"] = universe.genre
    if universe.playable_devices is not None:
        settings["playableDevices"] = encode_devices(universe.playable_devices)
    if universe.max_players is not None:
        settings["maxPlayerCount"] = universe.max_players
    if universe.private_server_cost is not None:
        settings.update(universe.private_server_cost.wire_fields())
    return settings


def changed_universe_fields(desired: UniverseState, recorded: UniverseState | None) -> list[str]:
    changed: list[str] = []
    for field_name in _STATE_FIELDS:
        value = getattr(desired, field_name)
        if value is None:
            continue
        if recorded is None or getattr(recorded, field_name) != value:
            changed.append(field_name)
    return changed


class UniverseReconciler:
    """Applies the declared universe settings through the cookie-authenticated gateway."""

    def __init__(
        self,
        gateway: UniverseGateway | None,
        ledger: Ledger,
        *,
        dry_run: bool = False,
    ) -> None:
        self._gateway = gateway
        self._ledger = ledger
        self._dry_run = dry_run

    async def reconcile(self, universe: UniverseConfig) -> ResourceOutcome | None:
        """Returns ``None`` when no universe settings are declared."""
        if not universe.has_settings():
            _LOG.debug("No universe settings declared")
            return None

        _LOG.info("Syncing Universe Settings...")
        label = universe.name or str(universe.id)
        desired = desired_universe_state(universe)
        changed = changed_universe_fields(desired, self._ledger.universe)
        outcome = ResourceOutcome(
            name=label,
            action=ResourceAction.SKIP,
            remote_id=universe.id,
            changed_fields=changed,
        )
        if not changed:
            _LOG.info("  [SKIP] Universe '%s' - no changes detected", label)
            return outcome

        settings = encode_universe_settings(universe)
        if self._dry_run:
            _LOG.info("  [UPDATE] Universe '%s' - would update: %s", label, ", ".join(changed))
            _LOG.debug("Universe settings patch: %s", settings)
            return outcome.model_copy(update={"action": ResourceAction.UPDATE})

        if self._gateway is None:
            raise ConfigError("ROBLOX_COOKIE is required to update universe settings")
        await self._gateway.update_configuration(settings)
        self._ledger.update_universe(desired)
        _LOG.info("  [UPDATED] Universe '%s' - updated: %s", label, ", ".join(changed))
        return outcome.model_copy(update={"action": ResourceAction.UPDATED})
