"""Configuration management - settings layers, global state and paths.

This package provides:
- SettingsStore: Layered user/workspace settings with schema defaults
- SettingsSection: Prefixed view used for the extension namespace
- GlobalState: Durable key/value state holding the version marker
- Paths: Default file locations
"""

from lens_migrate.config.paths import Paths
from lens_migrate.config.state import GlobalState
from lens_migrate.config.store import (
    Scope,
    SettingInspection,
    SettingsSection,
    SettingsStore,
)

__all__ = [
    "GlobalState",
    "Paths",
    "Scope",
    "SettingInspection",
    "SettingsSection",
    "SettingsStore",
]
