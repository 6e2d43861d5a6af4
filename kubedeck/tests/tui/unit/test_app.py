"""Unit tests for KubeDeckApp - class attributes, instantiation, host helpers.

Tests avoid running the Textual event loop; the smoke suite covers that.
Settings come from the isolated config directory set up in conftest.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from textual.app import App
from textual.binding import Binding

from kubedeck.app import KubeDeckApp
from kubedeck.constants import APP_TITLE
from kubedeck.keyboard.app import APP_BINDINGS
from kubedeck.views import ViewOrchestrator

# =============================================================================
# Class Attributes
# =============================================================================


class TestAppClassAttributes:
    """Test KubeDeckApp class-level attributes."""

    def test_app_inherits_from_textual_app(self) -> None:
        assert issubclass(KubeDeckApp, App)

    def test_app_title_set(self) -> None:
        assert KubeDeckApp.TITLE == APP_TITLE

    def test_app_bindings_match_app_bindings_constant(self) -> None:
        assert KubeDeckApp.BINDINGS is APP_BINDINGS
        for binding in KubeDeckApp.BINDINGS:
            assert isinstance(binding, Binding)


# =============================================================================
# Instantiation
# =============================================================================


class TestAppInstantiation:
    """Test constructor parameter handling."""

    def test_defaults(self) -> None:
        app = KubeDeckApp()
        assert app.initial_view == "pods"
        assert app.settings.namespace == "All"
        assert isinstance(app.orchestrator, ViewOrchestrator)
        assert app.orchestrator.settings is app.settings
        assert app.main_surface.surface_id == "main"

    def test_cli_overrides(self) -> None:
        app = KubeDeckApp(view="deployments", context="staging", namespace="kube-system")
        assert app.initial_view == "deployments"
        assert app.settings.context == "staging"
        assert app.settings.namespace == "kube-system"
        assert app.session.namespace == "kube-system"
        assert app.executor.context == "staging"

    def test_invalid_stored_settings_fall_back(self, isolated_config: Path) -> None:
        isolated_config.mkdir(parents=True)
        (isolated_config / "kubedeck.json").write_text(
            json.dumps({"settings": {"filter_history_max": "many"}}), encoding="utf-8"
        )
        app = KubeDeckApp()
        assert app.settings.filter_history_max == 10


# =============================================================================
# Host helpers
# =============================================================================


class TestEditorCommand:
    """Tests for editor resolution."""

    def test_settings_editor_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EDITOR", "nano")
        app = KubeDeckApp()
        app.settings.editor = "code --wait"
        assert app.editor_command(Path("/tmp/x.yaml")) == ["code", "--wait", "/tmp/x.yaml"]

    def test_environment_editor(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EDITOR", "nano")
        assert KubeDeckApp().editor_command(Path("a.yaml")) == ["nano", "a.yaml"]

    def test_fallback_editor(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("EDITOR", raising=False)
        assert KubeDeckApp().editor_command(Path("a.yaml")) == ["vi", "a.yaml"]
