"""Main listing screen - the primary display surface."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from contextlib import suppress
from typing import TYPE_CHECKING, cast

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from kubedeck.keyboard import RESOURCE_SCREEN_BINDINGS
from kubedeck.models.snapshot import ListingRow, ResourceSnapshot
from kubedeck.models.state.view_state import SortSpec
from kubedeck.widgets import ResourceTable

if TYPE_CHECKING:
    from kubedeck.app import KubeDeckApp

logger = logging.getLogger(__name__)

SortLookup = Callable[[str], SortSpec]


class ResourceScreen(Screen[None]):
    """Shows the current view's listing and forwards key actions."""

    BINDINGS = RESOURCE_SCREEN_BINDINGS
    DEFAULT_CSS = """
    ResourceScreen #hints {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    ResourceScreen ResourceTable {
        height: 1fr;
    }
    """

    surface_id = "main"

    def __init__(self, sort_lookup: SortLookup | None = None, show_hints: bool = True) -> None:
        super().__init__()
        self._sort_lookup = sort_lookup
        self._show_hints = show_hints
        self._pending: tuple[ResourceSnapshot, tuple[str, ...], list[ListingRow]] | None = None

    @property
    def kubedeck_app(self) -> KubeDeckApp:
        return cast("KubeDeckApp", self.app)

    @property
    def is_open(self) -> bool:
        return True

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="hints")
        yield ResourceTable(id="resource-table")
        yield Footer()

    def on_mount(self) -> None:
        self._render_pending()

    # ------------------------------------------------------------------
    # DisplaySurface
    # ------------------------------------------------------------------

    def show_listing(
        self,
        snapshot: ResourceSnapshot,
        headers: Sequence[str],
        rows: Sequence[ListingRow],
    ) -> None:
        self._pending = (snapshot, tuple(headers), list(rows))
        if self.is_mounted:
            self._render_pending()

    def show_text(self, snapshot: ResourceSnapshot) -> None:
        logger.debug("Main surface ignores text snapshot %s", snapshot.resource)

    def focused_row(self) -> ListingRow | None:
        try:
            return self.query_one(ResourceTable).focused_row()
        except NoMatches:
            return None

    def _render_pending(self) -> None:
        if self._pending is None:
            return
        snapshot, headers, rows = self._pending
        sort = self._sort_lookup(snapshot.resource) if self._sort_lookup else None
        with suppress(NoMatches):
            self.query_one(ResourceTable).load(headers, rows, sort)
        self.title = f"{snapshot.display_name} ({len(rows)})"
        with suppress(NoMatches):
            hints = self.query_one("#hints", Static)
            hints.display = self._show_hints
            hints.update(self._hint_line())

    def _hint_line(self) -> str:
        hints = self.kubedeck_app.orchestrator.hints()
        return "  ".join(f"{hint.key}: {hint.desc}" for hint in hints)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_refresh(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.refresh())

    def action_describe(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.describe())

    def action_show_yaml(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.show_yaml())

    def action_edit(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.edit())

    def action_delete(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.delete())

    def action_open_containers(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.open_containers())

    def action_sort(self) -> None:
        column = self.query_one(ResourceTable).focused_column()
        if column is None or not self.kubedeck_app.orchestrator.sort(column):
            self.notify("Move the cursor to a sortable column", severity="warning")

    def action_toggle_select(self) -> None:
        self.kubedeck_app.orchestrator.toggle_selection()

    def action_filter(self) -> None:
        self.kubedeck_app.run_action(self._prompt_filter())

    def action_label_filter(self) -> None:
        self.kubedeck_app.run_action(self._prompt_label_filter())

    def action_clear_filter(self) -> None:
        self.kubedeck_app.run_action(self.kubedeck_app.orchestrator.clear_filter())

    def action_toggle_headers(self) -> None:
        """Show or hide the hint line; the choice is kept in the settings."""
        settings = self.kubedeck_app.settings
        settings.headers = not settings.headers
        self._show_hints = settings.headers
        with suppress(NoMatches):
            hints = self.query_one("#hints", Static)
            hints.display = self._show_hints
            hints.update(self._hint_line())

    async def _prompt_filter(self) -> None:
        orchestrator = self.kubedeck_app.orchestrator
        term = await self.kubedeck_app.prompt(
            "Filter:", history=orchestrator.filter_history()
        )
        if term is not None:
            orchestrator.set_filter(term)

    async def _prompt_label_filter(self) -> None:
        selector = await self.kubedeck_app.prompt("Label selector:")
        if selector is not None:
            await self.kubedeck_app.orchestrator.set_label_filter(selector)


__all__ = [
    "ResourceScreen",
]
