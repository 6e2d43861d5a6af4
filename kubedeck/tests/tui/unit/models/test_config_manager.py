"""Tests for persisted preferences."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kubedeck.models.state.app_settings import AppSettings, ConfigLoadError, ConfigSaveError
from kubedeck.models.state.config_manager import ConfigManager, deep_merge


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_mappings_merge(self) -> None:
        base = {"settings": {"namespace": "All", "logs": {"since": "5m"}}, "keep": 1}
        fragment = {"settings": {"logs": {"since": "1h"}}}
        assert deep_merge(base, fragment) == {
            "settings": {"namespace": "All", "logs": {"since": "1h"}},
            "keep": 1,
        }

    def test_non_mappings_replace(self) -> None:
        assert deep_merge({"a": [1, 2], "b": {"c": 1}}, {"a": [3], "b": 2}) == {"a": [3], "b": 2}

    def test_base_not_mutated(self) -> None:
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"c": 2}})
        assert base == {"a": {"b": 1}}


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_document(self) -> None:
        assert ConfigManager.load_document() is None
        assert ConfigManager.load() == AppSettings()

    def test_unparseable_document(self, isolated_config: Path) -> None:
        isolated_config.mkdir(parents=True)
        ConfigManager.config_path().write_text("{broken", encoding="utf-8")
        assert ConfigManager.load_document() is None

    def test_save_document_merges(self) -> None:
        """Fragments are merged into what is already stored."""
        assert ConfigManager.save_document({"filter_history": {"pods": ["nginx"]}})
        assert ConfigManager.save_document({"filter_history": {"nodes": ["gpu"]}})

        stored = json.loads(ConfigManager.config_path().read_text(encoding="utf-8"))
        assert stored == {"filter_history": {"pods": ["nginx"], "nodes": ["gpu"]}}
        assert ConfigManager.load_filter_history() == {"pods": ["nginx"], "nodes": ["gpu"]}

    def test_unserialisable_fragment(self) -> None:
        """Encoding failures report False and leave the file alone."""
        ConfigManager.save_document({"a": 1})
        assert ConfigManager.save_document({"b": object()}) is False
        assert ConfigManager.load_document() == {"a": 1}

    def test_write_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A path that cannot be created reports False."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        monkeypatch.setattr(ConfigManager, "config_dir", blocker / "nested")

        assert ConfigManager.save_document({"a": 1}) is False
        with pytest.raises(ConfigSaveError):
            ConfigManager.save(AppSettings())

    def test_settings_round_trip(self) -> None:
        settings = AppSettings(namespace="kube-system", editor="nvim")
        settings.logs.since = "1h"
        ConfigManager.save(settings)

        loaded = ConfigManager.load()

        assert loaded.namespace == "kube-system"
        assert loaded.editor == "nvim"
        assert loaded.logs.since == "1h"

    def test_invalid_settings(self) -> None:
        ConfigManager.save_document({"settings": {"filter_history_max": "many"}})
        with pytest.raises(ConfigLoadError):
            ConfigManager.load()

    def test_save_keeps_filter_history(self) -> None:
        """Saving settings does not drop other keys."""
        ConfigManager.save_document({"filter_history": {"pods": ["web"]}})
        ConfigManager.save(AppSettings())
        assert ConfigManager.load_filter_history() == {"pods": ["web"]}
