"""Per-kind capability descriptors.

Game passes, developer products and badges share one reconciliation
algorithm. Everything that differs between them (declared fields and their
wire names, how ids and prices are read from listings, how icons travel,
which create errors deserve a friendlier message) lives in the table below.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from rbxsync.contracts.config import DeclaredResource, RbxSyncConfig
from rbxsync.contracts.exceptions import BadgePaymentSourceError, RbxSyncError, RemoteError
from rbxsync.contracts.ledger import ResourceState
from rbxsync.contracts.resource import ResourceKind

_LOG = logging.getLogger(__name__)

IconMode = Literal["asset", "inline"]

_PAYMENT_SOURCE_TYPES = {"user": 1, "group": 2}
_PAYMENT_SOURCE_SIGNATURES = ("Payment source is invalid", '"code":16')


@dataclass(frozen=True)
class FieldSpec:
    """A declared attribute, its lock-file twin, and its remote field name."""

    name: str
    wire_name: str


@dataclass(frozen=True)
class RemoteRecord:
    """A listing entry normalized to the fields the engine needs."""

    kind: ResourceKind
    remote_id: int
    name: str
    price: int | None = None
    fields: dict[str, Any] = field(default_factory=dict)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _first_int(record: dict[str, Any], keys: Sequence[str]) -> int | None:
    for key in keys:
        value = _as_int(record.get(key))
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class KindDescriptor:
    kind: ResourceKind
    label: str
    plural: str
    fields: tuple[FieldSpec, ...]
    id_keys: tuple[str, ...]
    icon_mode: IconMode
    price_keys: tuple[str, ...] = ()
    create_defaults: dict[str, Any] = field(default_factory=dict)
    create_extras: Callable[[RbxSyncConfig], dict[str, Any]] | None = None
    translate_create_error: Callable[[RemoteError, str], RbxSyncError | None] | None = None

    def declared(self, config: RbxSyncConfig) -> list[DeclaredResource]:
        declared: list[DeclaredResource] = getattr(config, self.kind.value)
        return declared

    def extract(self, record: dict[str, Any]) -> RemoteRecord | None:
        name = record.get("name")
        remote_id = _first_int(record, self.id_keys)
        if not isinstance(name, str) or remote_id is None:
            _LOG.debug("Ignoring %s listing entry without name or id: %s", self.label, record)
            return None
        return RemoteRecord(
            kind=self.kind,
            remote_id=remote_id,
            name=name,
            price=_first_int(record, self.price_keys) if self.price_keys else None,
            fields=dict(record),
        )

    def record_id(self, record: dict[str, Any]) -> int | None:
        return _first_int(record, self.id_keys)

    def changed_fields(self, declared: DeclaredResource, entry: ResourceState | None) -> list[str]:
        """Declared fields that differ from the last applied snapshot.

        Undeclared (``None``) fields are not managed and never reported.
        """
        changed: list[str] = []
        for spec in self.fields:
            value = getattr(declared, spec.name)
            if value is None:
                continue
            if entry is None or getattr(entry, spec.name) != value:
                changed.append(spec.name)
        return changed

    def wire_fields(self, declared: DeclaredResource, *, creating: bool) -> dict[str, Any]:
        body: dict[str, Any] = dict(self.create_defaults) if creating else {}
        for spec in self.fields:
            value = getattr(declared, spec.name)
            if value is not None:
                body[spec.wire_name] = value
        return body

    def snapshot(
        self,
        declared: DeclaredResource,
        *,
        icon_hash: str | None,
        icon_asset_id: int | None,
    ) -> ResourceState:
        values = {spec.name: getattr(declared, spec.name) for spec in self.fields}
        return ResourceState(**values, icon_hash=icon_hash, icon_asset_id=icon_asset_id)


def _badge_create_extras(config: RbxSyncConfig) -> dict[str, Any]:
    if config.badge_payment_source is None:
        return {}
    return {"paymentSourceType": _PAYMENT_SOURCE_TYPES[config.badge_payment_source]}


def _badge_create_error(error: RemoteError, name: str) -> RbxSyncError | None:
    text = f"{error} {error.body}"
    if any(signature in text for signature in _PAYMENT_SOURCE_SIGNATURES):
        return BadgePaymentSourceError(name)
    return None


GAME_PASSES = KindDescriptor(
    kind=ResourceKind.GAME_PASS,
    label="Game Pass",
    plural="Game Passes",
    fields=(
        FieldSpec("name", "name"),
        FieldSpec("description", "description"),
        FieldSpec("price", "price"),
        FieldSpec("is_for_sale", "isForSale"),
    ),
    id_keys=("id", "gamePassId"),
    price_keys=("price", "priceInRobux"),
    icon_mode="asset",
    create_defaults={"description": ""},
)

DEVELOPER_PRODUCTS = KindDescriptor(
    kind=ResourceKind.DEVELOPER_PRODUCT,
    label="Developer Product",
    plural="Developer Products",
    fields=(
        FieldSpec("name", "name"),
        FieldSpec("description", "description"),
        FieldSpec("price", "price"),
        FieldSpec("is_active", "isForSale"),
    ),
    id_keys=("id", "productId", "developerProductId"),
    price_keys=("price", "priceInRobux"),
    icon_mode="asset",
    create_defaults={"description": ""},
)

BADGES = KindDescriptor(
    kind=ResourceKind.BADGE,
    label="Badge",
    plural="Badges",
    fields=(
        FieldSpec("name", "name"),
        FieldSpec("description", "description"),
        FieldSpec("is_enabled", "enabled"),
    ),
    id_keys=("id",),
    icon_mode="inline",
    create_defaults={"description": ""},
    create_extras=_badge_create_extras,
    translate_create_error=_badge_create_error,
)

DESCRIPTORS: tuple[KindDescriptor, ...] = (GAME_PASSES, DEVELOPER_PRODUCTS, BADGES)


def descriptor_for(kind: ResourceKind) -> KindDescriptor:
    for descriptor in DESCRIPTORS:
        if descriptor.kind == kind:
            return descriptor
    raise KeyError(kind)  # pragma: no cover
