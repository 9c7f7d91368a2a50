"""Render remote resources as a Luau module for game code."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from rbxsync.contracts.resource import ResourceKind
from rbxsync.engine.kinds import RemoteRecord

_LOG = logging.getLogger(__name__)

LUAU_FILENAME = "config.luau"
LUA_FILENAME = "config.lua"

_INDENT = "\t"
_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def default_filename(*, lua: bool = False) -> str:
    return LUA_FILENAME if lua else LUAU_FILENAME


def quote(value: str) -> str:
    """Luau double-quoted string literal."""
    return '"' + "".join(_ESCAPES.get(char, char) for char in value) + '"'


def _render_entries(kind: ResourceKind, records: Sequence[RemoteRecord]) -> list[str]:
    lines = [f"{_INDENT}{kind.value} = {{"]
    seen: set[str] = set()
    for record in records:
        if record.name in seen:
            _LOG.warning("Skipping duplicate %s name in export: %s", kind.value, record.name)
            continue
        seen.add(record.name)
        fields = [f"id = {record.remote_id}"]
        if record.price is not None:
            fields.append(f"price = {record.price}")
        lines.append(f"{_INDENT * 2}[{quote(record.name)}] = {{ {', '.join(fields)} }},")
    lines.append(f"{_INDENT}}},")
    return lines


def render_luau(records: Mapping[ResourceKind, Sequence[RemoteRecord]]) -> str:
    """Render a ``return { game_passes = ..., developer_products = ..., badges = ... }`` module.

    Entries are keyed by name; every kind appears even when it has no records.
    """
    lines = ["-- Generated by rbxsync export. Do not edit by hand.", "return {"]
    for kind in ResourceKind:
        lines.extend(_render_entries(kind, records.get(kind, ())))
    lines.append("}")
    return "\n".join(lines) + "\n"
