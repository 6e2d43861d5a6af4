"""Tests for the view state store."""

from __future__ import annotations

from kubedeck.constants.enums import SortOrder
from kubedeck.models.snapshot import ListingRow
from kubedeck.models.state.view_state import (
    NavigationHistory,
    SelectionSet,
    SessionState,
    SortSpec,
    filter_rows,
    sort_rows,
)

HEADERS = ("NAME", "NAMESPACE", "RESTARTS")


def row(name: str, namespace: str | None = "default", restarts: str = "0") -> ListingRow:
    return ListingRow(name=name, namespace=namespace, cells=(name, namespace or "", restarts))


class TestSort:
    """Tests for sort toggling and ordering."""

    def test_toggle_flips_on_same_column(self) -> None:
        """Repeating a column flips the order; a new column starts ascending."""
        session = SessionState()
        session.register_sortable_columns("pods", HEADERS)

        first = session.toggle_sort("pods", "NAME")
        assert first is not None
        assert (first.column, first.order) == ("NAME", SortOrder.ASC)

        second = session.toggle_sort("pods", "NAME")
        assert second is not None
        assert second.order is SortOrder.DESC

        third = session.toggle_sort("pods", "RESTARTS")
        assert third is not None
        assert (third.column, third.order, third.last_column) == ("RESTARTS", SortOrder.ASC, "RESTARTS")

    def test_unknown_column_is_rejected(self) -> None:
        """Columns that were never rendered cannot be sorted."""
        session = SessionState()
        session.register_sortable_columns("pods", HEADERS)
        assert session.toggle_sort("pods", "AGE") is None
        assert session.toggle_sort("services", "NAME") is None

    def test_views_are_independent(self) -> None:
        """Sort state is keyed by view."""
        session = SessionState()
        session.register_sortable_columns("pods", HEADERS)
        session.register_sortable_columns("nodes", HEADERS)
        session.toggle_sort("pods", "NAME")
        assert session.sort_spec("nodes").column is None

    def test_numbers_sort_numerically_before_text(self) -> None:
        rows = [row("a", restarts="10"), row("b", restarts="9"), row("c", restarts="n/a")]
        ordered = sort_rows(rows, HEADERS, SortSpec(column="RESTARTS"))
        assert [r.name for r in ordered] == ["b", "a", "c"]

    def test_descending(self) -> None:
        rows = [row("b"), row("C"), row("a")]
        ordered = sort_rows(rows, HEADERS, SortSpec(column="NAME", order=SortOrder.DESC))
        assert [r.name for r in ordered] == ["C", "b", "a"]

    def test_no_column_keeps_order(self) -> None:
        rows = [row("b"), row("a")]
        assert sort_rows(rows, HEADERS, SortSpec()) == rows


class TestFilter:
    """Tests for filtering and filter history."""

    def test_substring_case_insensitive(self) -> None:
        rows = [row("nginx-1"), row("redis", "cache"), row("NGINX-2", "web")]
        assert [r.name for r in filter_rows(rows, "nginx")] == ["nginx-1", "NGINX-2"]
        assert [r.name for r in filter_rows(rows, "CACHE")] == ["redis"]
        assert filter_rows(rows, "  ") == rows

    def test_history_is_bounded(self) -> None:
        """Oldest terms are dropped beyond the configured maximum."""
        session = SessionState(filter_history_max=3)
        for term in ("a", "b", "c", "d"):
            history = session.append_filter_history("pods", term)
        assert history == ["b", "c", "d"]

    def test_empty_term_not_recorded(self) -> None:
        session = SessionState()
        assert session.append_filter_history("pods", "") == []

    def test_clear_filter(self) -> None:
        session = SessionState()
        session.set_filter("pods", " web ")
        session.set_label_filter("pods", "app=web")
        assert session.filter_spec("pods").term == "web"
        assert session.filter_spec("pods").active

        session.clear_filter("pods")
        assert not session.filter_spec("pods").active

    def test_restore_history_trims(self) -> None:
        session = SessionState(filter_history_max=2)
        session.restore_filter_history({"pods": ["a", "b", "c"]})
        assert session.filter_spec("pods").history == ["b", "c"]


class TestSelectionSet:
    """Tests for SelectionSet."""

    def test_toggle_twice_restores(self) -> None:
        """Toggling the same pair twice leaves the set as it was."""
        selection = SelectionSet()
        assert selection.toggle("nginx", "default") is True
        assert selection.contains("nginx", "default")
        assert selection.toggle("nginx", "default") is False
        assert len(selection) == 0

    def test_none_namespace_matches_any(self) -> None:
        selection = SelectionSet()
        selection.toggle("node-1", None)
        assert selection.contains("node-1", "anything")
        assert selection.contains("node-1")

    def test_same_name_other_namespace(self) -> None:
        selection = SelectionSet()
        selection.toggle("nginx", "default")
        assert not selection.contains("nginx", "staging")
        assert selection.toggle("nginx", "staging") is True
        assert list(selection) == [("nginx", "default"), ("nginx", "staging")]

    def test_empty_name_ignored(self) -> None:
        selection = SelectionSet()
        assert selection.toggle("", "default") is False
        assert selection.toggle(None) is False
        assert len(selection) == 0


class TestNavigationHistory:
    """Tests for NavigationHistory."""

    def test_lifo(self) -> None:
        history = NavigationHistory()
        history.push("pods")
        history.push("deployments")
        assert history.pop() == "deployments"
        assert history.peek() == "pods"
        assert history.pop() == "pods"

    def test_pop_empty(self) -> None:
        assert NavigationHistory().pop() is None


class TestSessionApply:
    """Tests for SessionState.apply."""

    def test_filter_sort_and_mark(self) -> None:
        session = SessionState()
        session.selection.toggle("nginx-2", "default")
        session.set_filter("pods", "nginx")
        session.register_sortable_columns("pods", HEADERS)
        session.toggle_sort("pods", "NAME")
        session.toggle_sort("pods", "NAME")

        rows = session.apply("pods", HEADERS, [row("nginx-1"), row("redis"), row("nginx-2")])

        assert [r.name for r in rows] == ["nginx-2", "nginx-1"]
        assert [r.selected for r in rows] == [True, False]

    def test_reset(self) -> None:
        session = SessionState()
        session.selection.toggle("a")
        session.history.push("pods")
        session.set_filter("pods", "x")
        session.reset()
        assert len(session.selection) == 0
        assert len(session.history) == 0
        assert session.filter_spec("pods").term == ""
