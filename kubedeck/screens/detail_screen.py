"""Floating detail surface for describe/yaml/logs and the containers listing."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from contextlib import suppress
from typing import TYPE_CHECKING, cast

from rich.syntax import Syntax as RichSyntax
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Static

from kubedeck.constants.enums import Syntax
from kubedeck.keyboard import DETAIL_SCREEN_BINDINGS
from kubedeck.models.snapshot import ListingRow, ResourceSnapshot
from kubedeck.widgets import ResourceTable

if TYPE_CHECKING:
    from kubedeck.app import KubeDeckApp

_surface_ids = itertools.count(1)


def render_snapshot(snapshot: ResourceSnapshot) -> RichSyntax | Text:
    """Rich renderable for a text snapshot; structured payloads are highlighted."""
    if snapshot.syntax in (Syntax.JSON, Syntax.YAML):
        return RichSyntax(snapshot.raw, snapshot.syntax.value, word_wrap=True)
    return Text(snapshot.raw)


class DetailScreen(ModalScreen[None]):
    """Modal surface keyed by the content it shows.

    Each instance gets a fresh ``surface_id``; ``is_open`` turns false once
    dismissed, which silences event subscriptions scoped to it.
    """

    BINDINGS = DETAIL_SCREEN_BINDINGS
    DEFAULT_CSS = """
    DetailScreen {
        align: center middle;
    }

    DetailScreen #detail-container {
        width: 90%;
        height: 85%;
        border: round $accent;
        background: $surface;
    }

    DetailScreen #detail-title {
        text-style: bold;
        padding: 0 1;
    }
    """

    def __init__(self, key: str, title: str) -> None:
        super().__init__()
        self.key = key
        self.surface_id = f"{key}#{next(_surface_ids)}"
        self._title = title
        self._closed = False
        self._listing: tuple[tuple[str, ...], list[ListingRow]] | None = None
        self._snapshot: ResourceSnapshot | None = None

    @property
    def kubedeck_app(self) -> KubeDeckApp:
        return cast("KubeDeckApp", self.app)

    @property
    def is_open(self) -> bool:
        return not self._closed

    def compose(self) -> ComposeResult:
        with Vertical(id="detail-container"):
            yield Static(self._title, id="detail-title")
            yield ResourceTable(id="detail-table")
            with VerticalScroll(id="detail-scroll"):
                yield Static("", id="detail-body")

    def on_mount(self) -> None:
        self._render()

    def on_unmount(self) -> None:
        self._closed = True

    # ------------------------------------------------------------------
    # DisplaySurface
    # ------------------------------------------------------------------

    def show_listing(
        self,
        snapshot: ResourceSnapshot,
        headers: Sequence[str],
        rows: Sequence[ListingRow],
    ) -> None:
        self._snapshot = snapshot
        self._listing = (tuple(headers), list(rows))
        if self.is_mounted:
            self._render()

    def show_text(self, snapshot: ResourceSnapshot) -> None:
        self._snapshot = snapshot
        self._listing = None
        if self.is_mounted:
            self._render()

    def focused_row(self) -> ListingRow | None:
        if self._listing is None:
            return None
        try:
            return self.query_one("#detail-table", ResourceTable).focused_row()
        except NoMatches:
            return None

    def _render(self) -> None:
        if self._snapshot is None:
            return
        with suppress(NoMatches):
            table = self.query_one("#detail-table", ResourceTable)
            scroll = self.query_one("#detail-scroll", VerticalScroll)
            if self._listing is not None:
                headers, rows = self._listing
                table.load(headers, rows)
                table.display = True
                scroll.display = False
                table.focus()
            else:
                self.query_one("#detail-body", Static).update(render_snapshot(self._snapshot))
                table.display = False
                scroll.display = True
                scroll.focus()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_close(self) -> None:
        self._closed = True
        self.dismiss(None)

    def action_refresh(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.refresh_float(self.key))

    def _select_focused_container(self) -> None:
        row = self.focused_row()
        if row is not None:
            self.kubedeck_app.orchestrator.containers().select_container(row.name)

    def action_logs(self) -> None:
        self._select_focused_container()
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.containers().logs())

    def action_exec(self) -> None:
        self._select_focused_container()
        self.kubedeck_app.orchestrator.containers().exec()

    def action_debug(self) -> None:
        self._select_focused_container()
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.containers().debug())

    def action_toggle_previous(self) -> None:
        containers = self.kubedeck_app.orchestrator.containers()
        containers.toggle_previous()
        self.kubedeck_app.run_action(containers.logs(reload=True))

    def action_log_since(self) -> None:
        self.kubedeck_app.run_action(self._prompt_log_since())

    async def _prompt_log_since(self) -> None:
        containers = self.kubedeck_app.orchestrator.containers()
        since = await self.kubedeck_app.prompt(
            "Logs since (e.g. 30s, 5m, 2h):", value=containers.log_since
        )
        if since is not None:
            containers.set_log_since(since)
            await containers.logs(reload=True)


__all__ = [
    "DetailScreen",
    "render_snapshot",
]
