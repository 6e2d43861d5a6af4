"""ResourceTable - DataTable rendering a resource listing.

Rows arrive already filtered and sorted by the session state; the table only
renders them, marks the sorted column and maps the cursor back to a
:class:`~kubedeck.models.snapshot.ListingRow`.

CSS Classes: widget-resource-table
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import suppress
from typing import Any, ClassVar

from textual.coordinate import Coordinate
from textual.widgets import DataTable

from kubedeck.constants.enums import SortOrder
from kubedeck.constants.values import SELECTION_MARK
from kubedeck.keyboard import DATA_TABLE_BINDINGS
from kubedeck.models.snapshot import ListingRow
from kubedeck.models.state.view_state import SortSpec


class ResourceTable(DataTable):
    """Listing table with sort indicators and selection marks."""

    BINDINGS = DATA_TABLE_BINDINGS
    _DEFAULT_CLASSES: ClassVar[str] = "widget-resource-table"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        if "classes" not in kwargs or not kwargs.get("classes"):
            kwargs["classes"] = self._DEFAULT_CLASSES
        kwargs.setdefault("cursor_type", "row")
        kwargs.setdefault("zebra_stripes", True)
        super().__init__(*args, **kwargs)
        self._rows: list[ListingRow] = []
        self._headers: tuple[str, ...] = ()

    @property
    def headers(self) -> tuple[str, ...]:
        return self._headers

    @property
    def listing(self) -> list[ListingRow]:
        return list(self._rows)

    @staticmethod
    def column_label(header: str, sort: SortSpec | None) -> str:
        """Header label with ``[+]``/``[-]`` on the sorted column."""
        if sort is None or sort.column != header:
            return header
        return f"{header} [+]" if sort.order is SortOrder.ASC else f"{header} [-]"

    def load(
        self,
        headers: Sequence[str],
        rows: Sequence[ListingRow],
        sort: SortSpec | None = None,
        show_headers: bool = True,
    ) -> None:
        """Replace the table contents, keeping the cursor row when possible."""
        previous = self.cursor_row
        self._headers = tuple(headers)
        self._rows = list(rows)
        self.show_header = show_headers
        self.clear(columns=True)
        self.add_column("", key="_mark")
        for header in self._headers:
            self.add_column(self.column_label(header, sort), key=header)
        for index, row in enumerate(self._rows):
            mark = SELECTION_MARK if row.selected else ""
            self.add_row(mark, *row.cells, key=str(index))
        if self._rows:
            with suppress(Exception):
                self.cursor_coordinate = Coordinate(min(previous, len(self._rows) - 1), 0)

    def focused_row(self) -> ListingRow | None:
        if not self._rows:
            return None
        index = self.cursor_row
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def focused_column(self) -> str | None:
        """Header under the cursor, skipping the selection mark column."""
        index = self.cursor_column - 1
        if 0 <= index < len(self._headers):
            return self._headers[index]
        return None


__all__ = [
    "ResourceTable",
]
