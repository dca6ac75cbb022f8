"""YAML Configuration Loader

Loads defaults.yaml and provides dotted-key access.

Usage:
    from mott_mc.config import get_default
    cos_min = get_default('model.cos_theta_limit')
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml


def _get_yaml_path() -> Path:
    """Get the path to defaults.yaml.

    Searched in order:
    1. Environment variable MOTT_MC_DEFAULTS_PATH
    2. defaults.yaml next to this module

    Raises:
        FileNotFoundError: If defaults.yaml cannot be found.
    """
    env_path = os.getenv("MOTT_MC_DEFAULTS_PATH")
    if env_path and Path(env_path).exists():
        return Path(env_path)

    yaml_path = Path(__file__).parent / "defaults.yaml"
    if not yaml_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {yaml_path}\n"
            f"Set MOTT_MC_DEFAULTS_PATH environment variable if file is relocated."
        )
    return yaml_path


def _load_yaml_config() -> dict[str, Any]:
    yaml_path = _get_yaml_path()
    with open(yaml_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


_CONFIG_CACHE: dict[str, Any] | None = None


def _get_config() -> dict[str, Any]:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = _load_yaml_config()
    return _CONFIG_CACHE


def get_defaults() -> dict[str, Any]:
    """Get a copy of the full configuration dictionary."""
    return _get_config().copy()


def get_default(key_path: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key path.

    Args:
        key_path: Dotted path to the value (e.g., 'model.particle')
        default: Returned if the key is missing or null

    Example:
        >>> get_default('model.particle')
        'e-'
        >>> get_default('nonexistent.key', 'fallback')
        'fallback'
    """
    value = _get_config()
    for key in key_path.split("."):
        if isinstance(value, dict):
            value = value.get(key)
            if value is None:
                return default
        else:
            return default
    return value if value is not None else default


def reload_defaults() -> None:
    """Reload defaults.yaml from disk (e.g. after changing MOTT_MC_DEFAULTS_PATH)."""
    global _CONFIG_CACHE
    _CONFIG_CACHE = _load_yaml_config()
