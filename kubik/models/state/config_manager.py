"""Settings persistence: loads and saves AppSettings as YAML."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubik.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "KUBIK_CONFIG_DIR"
SETTINGS_FILE_NAME = "settings.yaml"


class ConfigManager:
    """Reads and writes the settings file."""

    @staticmethod
    def config_dir() -> Path:
        """Return the settings directory, honoring $KUBIK_CONFIG_DIR."""
        override = os.environ.get(CONFIG_DIR_ENV)
        if override:
            return Path(override).expanduser()
        return Path.home() / ".config" / "kubik"

    @classmethod
    def settings_path(cls) -> Path:
        return cls.config_dir() / SETTINGS_FILE_NAME

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings, falling back to defaults when no file exists.

        Raises:
            ConfigLoadError: If the file exists but cannot be read or validated.
        """
        settings_path = path or cls.settings_path()
        if not settings_path.exists():
            return AppSettings()
        try:
            raw = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Cannot read {settings_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {settings_path} is not a mapping")
        try:
            return AppSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> None:
        """Persist settings.

        Raises:
            ConfigSaveError: If the file cannot be written.
        """
        settings_path = path or cls.settings_path()
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            settings_path.write_text(
                yaml.safe_dump(settings.model_dump(), sort_keys=True),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write {settings_path}: {exc}") from exc
        logger.debug("Saved settings to %s", settings_path)


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
