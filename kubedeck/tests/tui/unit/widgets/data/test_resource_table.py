"""Tests for ResourceTable widget."""

from __future__ import annotations

import pytest
from textual.widgets import DataTable

from kubedeck.constants.enums import SortOrder
from kubedeck.keyboard import DATA_TABLE_BINDINGS
from kubedeck.models.state.view_state import SortSpec
from kubedeck.widgets.data.resource_table import ResourceTable


class TestResourceTable:
    """Tests for ResourceTable widget."""

    def test_inherits_data_table(self) -> None:
        table = ResourceTable()
        assert isinstance(table, DataTable)
        assert table.BINDINGS is DATA_TABLE_BINDINGS
        assert table.has_class("widget-resource-table")

    def test_explicit_classes_kept(self) -> None:
        table = ResourceTable(classes="custom")
        assert table.has_class("custom")
        assert not table.has_class("widget-resource-table")

    def test_empty_table_has_no_focus(self) -> None:
        table = ResourceTable()
        assert table.focused_row() is None
        assert table.listing == []

    @pytest.mark.parametrize(
        ("order", "expected"),
        [(SortOrder.ASC, "NAME [+]"), (SortOrder.DESC, "NAME [-]")],
    )
    def test_column_label_marks_sorted_column(self, order: SortOrder, expected: str) -> None:
        sort = SortSpec(columns=("NAME", "AGE"), column="NAME", order=order)
        assert ResourceTable.column_label("NAME", sort) == expected
        assert ResourceTable.column_label("AGE", sort) == "AGE"

    def test_column_label_unsorted(self) -> None:
        assert ResourceTable.column_label("NAME", None) == "NAME"
        assert ResourceTable.column_label("NAME", SortSpec()) == "NAME"
