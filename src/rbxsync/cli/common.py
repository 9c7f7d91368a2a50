"""Shared CLI formatting helpers."""

from __future__ import annotations


def format_comma_or_none(values: list[str]) -> str:
    if not values:
        return "none"
    return ", ".join(values)


def format_ids(values: list[int]) -> str:
    return format_comma_or_none([str(value) for value in values])
