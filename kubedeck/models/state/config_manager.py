"""Persisted preferences: a JSON document with read-merge-write discipline.

Usage:
    from kubedeck.models.state.config_manager import ConfigManager

    settings = ConfigManager.load()
    ConfigManager.save_document({"filter_history": {"pods": ["nginx"]}})
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from kubedeck.constants.defaults import CONFIG_DIR_NAME, CONFIG_FILE_NAME
from kubedeck.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
FILTER_HISTORY_KEY = "filter_history"


def deep_merge(base: Mapping[str, Any], fragment: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``fragment`` into ``base``; nested mappings merge, everything else is replaced."""
    merged: dict[str, Any] = dict(base)
    for key, value in fragment.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Reads and writes the preferences document."""

    # Overridden in tests to point at a temporary directory.
    config_dir: Path | None = None

    @classmethod
    def config_path(cls) -> Path:
        """Return the preferences file path."""
        if cls.config_dir is not None:
            return cls.config_dir / CONFIG_FILE_NAME
        data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        return Path(data_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    @classmethod
    def load_document(cls) -> dict[str, Any] | None:
        """Return the stored document, or None when missing or unparseable."""
        path = cls.config_path()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            return None
        try:
            document = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Ignoring unparseable preferences file %s", path)
            return None
        return document if isinstance(document, dict) else None

    @classmethod
    def save_document(cls, fragment: Mapping[str, Any]) -> bool:
        """Deep-merge ``fragment`` into the stored document and write it back.

        Returns:
            True when the merged document was written, False otherwise.
        """
        merged = deep_merge(cls.load_document() or {}, fragment)
        try:
            encoded = json.dumps(merged, indent=2)
        except (TypeError, ValueError):
            logger.warning("Preferences fragment is not JSON serialisable")
            return False

        path = cls.config_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(encoded, encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to write preferences to %s: %s", path, exc)
            return False
        return True

    @classmethod
    def load(cls) -> AppSettings:
        """Load settings, falling back to defaults when nothing is stored."""
        document = cls.load_document() or {}
        try:
            return AppSettings.model_validate(document.get(SETTINGS_KEY) or {})
        except ValidationError as exc:
            raise ConfigLoadError(str(exc)) from exc

    @classmethod
    def save(cls, settings: AppSettings) -> None:
        """Persist settings under the ``settings`` key."""
        if not cls.save_document({SETTINGS_KEY: settings.model_dump()}):
            raise ConfigSaveError(f"Could not write {cls.config_path()}")

    @classmethod
    def load_filter_history(cls) -> dict[str, list[str]]:
        """Return stored filter history keyed by view name."""
        document = cls.load_document() or {}
        stored = document.get(FILTER_HISTORY_KEY)
        if not isinstance(stored, dict):
            return {}
        return {
            str(view): [str(term) for term in terms]
            for view, terms in stored.items()
            if isinstance(terms, list)
        }


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "deep_merge",
]
