"""Declared configuration models.

These mirror ``rbxsync.yml``. Pydantic handles required-field checks, type
coercion, and default values; the loader resolves relative paths against the
directory holding the config file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_FILENAME = "rbxsync.yml"


class PrivateServerCost(BaseModel):
    """Private server pricing: disabled, free, or paid at a price in Robux.

    Declared as ``"disabled"``, ``"free"``, ``0`` or a positive number.
    """

    mode: Literal["disabled", "free", "paid"]
    price: int = 0

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: Any) -> PrivateServerCost:
        if isinstance(value, PrivateServerCost):
            return value
        if isinstance(value, bool):
            raise ValueError("private_server_cost must be 'disabled', 'free', 0, or a positive number")
        if isinstance(value, int):
            if value < 0:
                raise ValueError("private_server_cost cannot be negative")
            return cls(mode="free") if value == 0 else cls(mode="paid", price=value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text == "disabled":
                return cls(mode="disabled")
            if text == "free":
                return cls(mode="free")
            if text.isdigit():
                return cls.parse(int(text))
        raise ValueError(
            f"invalid private_server_cost: {value!r}. Use 'disabled', 'free', 0, or a positive number"
        )

    def ledger_value(self) -> str:
        """Encoding stored in the lock file: ``disabled``, ``0`` or the price."""
        if self.mode == "disabled":
            return "disabled"
        return str(self.price)

    def wire_fields(self) -> dict[str, Any]:
        if self.mode == "disabled":
            return {"allowPrivateServers": False}
        return {"allowPrivateServers": True, "privateServerPrice": self.price}


class CreatorConfig(BaseModel):
    """Owner of uploaded assets."""

    id: str
    creator_type: Literal["user", "group"] = Field(alias="type")

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class UniverseConfig(BaseModel):
    id: int
    name: str | None = None
    description: str | None = None
    genre: str | None = None
    playable_devices: list[str] | None = None
    max_players: int | None = Field(default=None, ge=1)
    private_server_cost: PrivateServerCost | None = None

    @field_validator("private_server_cost", mode="before")
    @classmethod
    def _parse_private_server_cost(cls, value: Any) -> Any:
        if value is None:
            return None
        return PrivateServerCost.parse(value)

    def has_settings(self) -> bool:
        return any(
            value is not None
            for value in (
                self.name,
                self.description,
                self.genre,
                self.playable_devices,
                self.max_players,
                self.private_server_cost,
            )
        )


class GamePassConfig(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: int | None = Field(default=None, ge=0)
    icon: str | None = None
    is_for_sale: bool | None = None


class DeveloperProductConfig(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: int = Field(ge=0)
    icon: str | None = None
    is_active: bool | None = None


class BadgeConfig(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    icon: str | None = None
    is_enabled: bool | None = None


class PlaceConfig(BaseModel):
    place_id: int
    file_path: Path
    publish: bool = False


DeclaredResource = GamePassConfig | DeveloperProductConfig | BadgeConfig


class RbxSyncConfig(BaseModel):
    """Top-level declared configuration for one experience.

    Attributes:
        project_root: Directory holding the config file; the lock file lives here.
        assets_dir: Base directory for icon files.
        creator: Asset owner, required only when an icon upload happens.
        badge_payment_source: Who pays for badge creation ("user" or "group").
    """

    project_root: Path = Field(default_factory=Path.cwd, exclude=True)
    assets_dir: Path = Path("assets")
    creator: CreatorConfig | None = None
    universe: UniverseConfig
    game_passes: list[GamePassConfig] = Field(default_factory=list)
    developer_products: list[DeveloperProductConfig] = Field(default_factory=list)
    badges: list[BadgeConfig] = Field(default_factory=list)
    places: list[PlaceConfig] = Field(default_factory=list)
    badge_payment_source: Literal["user", "group"] | None = None

    model_config = {"extra": "forbid"}

    def icon_path(self, icon: str) -> Path:
        path = Path(icon)
        if path.is_absolute():
            return path
        return self.assets_dir / path
