"""Configuration: YAML defaults with dotted-key access."""

from mott_mc.config.loader import get_default, get_defaults, reload_defaults

__all__ = ["get_default", "get_defaults", "reload_defaults"]
