"""Utility modules for configuration and helper functions."""

from .config import (
    WorkoutMapConfig,
    MapSettings,
    PopupSettings,
    StorageSettings,
    UISettings,
    get_config,
    reset_config
)

__all__ = [
    "WorkoutMapConfig",
    "MapSettings",
    "PopupSettings",
    "StorageSettings",
    "UISettings",
    "get_config",
    "reset_config"
]
