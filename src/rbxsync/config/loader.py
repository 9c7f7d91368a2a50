"""Config loading and path resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from rbxsync.contracts.config import RbxSyncConfig
from rbxsync.contracts.exceptions import ConfigError


def _resolve_path(value: Path, *, base_dir: Path) -> Path:
    value = value.expanduser()
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path) -> RbxSyncConfig:
    """Load and validate ``rbxsync.yml``, resolving relative paths against its directory."""
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in config file: {config_path}") from exc

    if not isinstance(raw_payload, dict):
        raise ConfigError(f"config file must contain a mapping: {config_path}")

    try:
        parsed = RbxSyncConfig.model_validate(raw_payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    places = [
        place.model_copy(update={"file_path": _resolve_path(place.file_path, base_dir=config_dir)})
        for place in parsed.places
    ]
    return parsed.model_copy(
        update={
            "project_root": config_dir,
            "assets_dir": _resolve_path(parsed.assets_dir, base_dir=config_dir),
            "places": places,
        }
    )


def load_environment(config_path: str | Path) -> bool:
    """Load a ``.env`` file next to the config without overriding existing variables."""
    dotenv_path = Path(config_path).expanduser().resolve().parent / ".env"
    if not dotenv_path.is_file():
        return False
    return load_dotenv(dotenv_path=dotenv_path, override=False)


__all__ = ["load_config", "load_environment"]
