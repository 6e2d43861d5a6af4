"""Application state: settings, preferences and the per-session view state."""

from kubedeck.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    KubectlCommandSettings,
    LogSettings,
)
from kubedeck.models.state.config_manager import ConfigManager
from kubedeck.models.state.view_state import (
    FilterSpec,
    NavigationHistory,
    SelectionSet,
    SessionState,
    SortSpec,
)

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "FilterSpec",
    "KubectlCommandSettings",
    "LogSettings",
    "NavigationHistory",
    "SelectionSet",
    "SessionState",
    "SortSpec",
]
