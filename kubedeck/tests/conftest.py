"""Shared fixtures for kubedeck tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import pytest

from kubedeck.models.snapshot import ListingRow, ResourceSnapshot
from kubedeck.models.state.config_manager import ConfigManager


class RecordingNotifier:
    """Notifier collecting ``(message, severity)`` pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, message: str, *, title: str = "", severity: Any = "information") -> None:
        self.messages.append((message, str(severity)))

    def texts(self, severity: str | None = None) -> list[str]:
        return [text for text, level in self.messages if severity is None or level == severity]


class FakeSurface:
    """In-memory display surface."""

    def __init__(self, surface_id: str = "main") -> None:
        self.surface_id = surface_id
        self.open = True
        self.row: ListingRow | None = None
        self.listings: list[tuple[ResourceSnapshot, tuple[str, ...], list[ListingRow]]] = []
        self.texts: list[ResourceSnapshot] = []

    @property
    def is_open(self) -> bool:
        return self.open

    def show_listing(
        self,
        snapshot: ResourceSnapshot,
        headers: Sequence[str],
        rows: Sequence[ListingRow],
    ) -> None:
        self.listings.append((snapshot, tuple(headers), list(rows)))

    def show_text(self, snapshot: ResourceSnapshot) -> None:
        self.texts.append(snapshot)

    def focused_row(self) -> ListingRow | None:
        return self.row


class FakeHost(RecordingNotifier):
    """Host answering confirmations from a queue (default: decline)."""

    def __init__(self) -> None:
        super().__init__()
        self.main = FakeSurface()
        self.floats: list[tuple[str, FakeSurface]] = []
        self.answers: list[bool] = []
        self.prompts: list[str] = []
        self.edited: list[Path] = []
        self.suspended = 0

    @property
    def main_surface(self) -> FakeSurface:
        return self.main

    async def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else False

    def open_float(self, key: str, title: str) -> FakeSurface:
        surface = FakeSurface(f"{key}#{len(self.floats) + 1}")
        self.floats.append((key, surface))
        return surface

    async def edit_file(self, path: Path) -> None:
        self.edited.append(path)

    @contextmanager
    def suspend(self) -> Iterator[None]:
        self.suspended += 1
        yield


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the preferences document at a temporary directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(ConfigManager, "config_dir", config_dir)
    return config_dir


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()
