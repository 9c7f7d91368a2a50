"""Managed resource kinds."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """Monetization resource kinds; values double as lock-file section names."""

    GAME_PASS = "game_passes"
    DEVELOPER_PRODUCT = "developer_products"
    BADGE = "badges"
