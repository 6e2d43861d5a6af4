"""Tests for the Typer command line entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from kubedeck import __version__
from kubedeck.cli import app, configure_logging

runner = CliRunner()


class TestCli:
    """Tests for argument handling."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"kubedeck version {__version__}" in result.output

    def test_options_reach_app(self) -> None:
        with patch("kubedeck.app.KubeDeckApp") as app_class:
            result = runner.invoke(app, ["deployments", "-c", "staging", "-n", "web"])

        assert result.exit_code == 0
        app_class.assert_called_once_with(view="deployments", context="staging", namespace="web")
        app_class.return_value.run.assert_called_once_with()


class TestConfigureLogging:
    """Tests for log routing."""

    def test_log_file_created(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "kubedeck.log"
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        try:
            root.handlers = []
            configure_logging(log_file, verbose=True)
            assert log_file.parent.is_dir()
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = handlers
            root.setLevel(level)
