"""Configuration management."""

from gbomb.config.settings import GiantBombSettings, get_settings

__all__ = [
    "GiantBombSettings",
    "get_settings",
]
