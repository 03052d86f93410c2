"""Keyroute settings loading."""

from keyroute.config.settings import (
    EngineSettings,
    KeyrouteSettings,
    SettingsError,
    UserSettings,
    load_settings,
)

__all__ = [
    "EngineSettings",
    "KeyrouteSettings",
    "SettingsError",
    "UserSettings",
    "load_settings",
]
