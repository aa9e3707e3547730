"""Configuration loading utilities for easydate."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    ParserSettings,
    Settings,
    TimezoneSettings,
    bootstrap_settings,
    config_path,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ParserSettings",
    "Settings",
    "TimezoneSettings",
    "bootstrap_settings",
    "config_path",
    "load_settings",
    "save_settings",
]
