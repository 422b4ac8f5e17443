"""Application state and settings models."""

from kubik.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)
from kubik.models.state.config_manager import ConfigManager
from kubik.models.state.session import DashboardSession

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "DashboardSession",
]
