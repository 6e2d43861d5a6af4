"""Interfaces the orchestrator expects from the host UI.

The Textual app and its screens implement these; tests use in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, Protocol

from kubedeck.models.snapshot import ListingRow, ResourceSnapshot


class DisplaySurface(Protocol):
    """A visible region showing a listing or a detail text."""

    surface_id: str

    @property
    def is_open(self) -> bool: ...

    def show_listing(
        self,
        snapshot: ResourceSnapshot,
        headers: Sequence[str],
        rows: Sequence[ListingRow],
    ) -> None: ...

    def show_text(self, snapshot: ResourceSnapshot) -> None: ...

    def focused_row(self) -> ListingRow | None: ...


class Host(Protocol):
    """The interactive host: notifications, prompts, surfaces and editors."""

    @property
    def main_surface(self) -> DisplaySurface: ...

    def notify(
        self,
        message: str,
        *,
        title: str = "",
        severity: Any = "information",
    ) -> None: ...

    async def confirm(self, prompt: str) -> bool: ...

    def open_float(self, key: str, title: str) -> DisplaySurface: ...

    async def edit_file(self, path: Path) -> None: ...

    def suspend(self) -> AbstractContextManager[Any]: ...


__all__ = [
    "DisplaySurface",
    "Host",
]
