"""Declared configuration loading."""

from rbxsync.config.loader import load_config, load_environment

__all__ = ["load_config", "load_environment"]
