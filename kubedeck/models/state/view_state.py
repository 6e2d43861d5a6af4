"""View State Store - per-view sort/filter state plus session-wide selection and history.

A single :class:`SessionState` is created at session start and handed to every
component that needs it. Sort and filter state are keyed by view name, so two
views never share them, while the same view name resolves to the same state
from any surface. The selection set and the navigation history are shared by
all views of the session.

All mutation happens on the event loop thread; there is no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from kubedeck.constants.defaults import FILTER_HISTORY_MAX_DEFAULT, NAMESPACE_ALL
from kubedeck.constants.enums import SortOrder
from kubedeck.models.snapshot import ListingRow

logger = logging.getLogger(__name__)


# ============================================================================
# Sort
# ============================================================================


@dataclass
class SortSpec:
    """Sort state for one view."""

    columns: tuple[str, ...] = ()
    column: str | None = None
    order: SortOrder = SortOrder.ASC
    last_column: str | None = None


# ============================================================================
# Filter
# ============================================================================


@dataclass
class FilterSpec:
    """Filter state for one view."""

    term: str = ""
    label_selector: str = ""
    history: list[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.term or self.label_selector)


# ============================================================================
# Selection
# ============================================================================


class SelectionSet:
    """Resources tagged for batch action, as ``(name, namespace)`` pairs.

    A ``None`` namespace on either side matches any namespace.
    """

    def __init__(self) -> None:
        self._items: list[tuple[str, str | None]] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    @staticmethod
    def _matches(entry: tuple[str, str | None], name: str, namespace: str | None) -> bool:
        entry_name, entry_namespace = entry
        if entry_name != name:
            return False
        return namespace is None or entry_namespace is None or entry_namespace == namespace

    def contains(self, name: str, namespace: str | None = None) -> bool:
        return any(self._matches(entry, name, namespace) for entry in self._items)

    def toggle(self, name: str | None, namespace: str | None = None) -> bool:
        """Add or remove a pair.

        Returns:
            True when the pair is selected after the call.
        """
        if not name:
            return False
        remaining = [entry for entry in self._items if not self._matches(entry, name, namespace)]
        if len(remaining) != len(self._items):
            self._items = remaining
            return False
        self._items.append((name, namespace))
        return True

    def clear(self) -> None:
        self._items.clear()


# ============================================================================
# Navigation history
# ============================================================================


class NavigationHistory:
    """Stack of previously visited view identities."""

    def __init__(self) -> None:
        self._stack: list[str] = []

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, view: str) -> None:
        self._stack.append(view)

    def pop(self) -> str | None:
        """Pop the most recent view; popping an empty stack returns None."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek(self) -> str | None:
        return self._stack[-1] if self._stack else None

    def clear(self) -> None:
        self._stack.clear()


# ============================================================================
# Session
# ============================================================================


class SessionState:
    """Session context holding every piece of mutable view state.

    Lifecycle: created at session start, cleared piecewise by explicit
    user actions (``clear_filter``, ``selection.clear``), reset wholesale by
    :meth:`reset` at session end.
    """

    def __init__(
        self,
        *,
        namespace: str = NAMESPACE_ALL,
        filter_history_max: int = FILTER_HISTORY_MAX_DEFAULT,
    ) -> None:
        self.namespace = namespace
        self.filter_history_max = filter_history_max
        self.selection = SelectionSet()
        self.history = NavigationHistory()
        self._sort: dict[str, SortSpec] = {}
        self._filters: dict[str, FilterSpec] = {}

    # ------------------------------------------------------------------
    # Sort
    # ------------------------------------------------------------------

    def sort_spec(self, view: str) -> SortSpec:
        return self._sort.setdefault(view, SortSpec())

    def register_sortable_columns(self, view: str, columns: Iterable[str]) -> None:
        self.sort_spec(view).columns = tuple(columns)

    def toggle_sort(self, view: str, column: str) -> SortSpec | None:
        """Sort ``view`` by ``column``, flipping direction on a repeat.

        Returns:
            The updated spec, or None when ``column`` is not sortable for ``view``.
        """
        spec = self._sort.get(view)
        if spec is None or column not in spec.columns:
            return None
        if spec.last_column == column:
            spec.order = spec.order.flipped()
        else:
            spec.order = SortOrder.ASC
        spec.column = column
        spec.last_column = column
        logger.debug("Sort %s by %s %s", view, column, spec.order.value)
        return spec

    # ------------------------------------------------------------------
    # Filter
    # ------------------------------------------------------------------

    def filter_spec(self, view: str) -> FilterSpec:
        return self._filters.setdefault(view, FilterSpec())

    def set_filter(self, view: str, term: str) -> None:
        self.filter_spec(view).term = term.strip()

    def set_label_filter(self, view: str, selector: str) -> None:
        self.filter_spec(view).label_selector = selector.strip()

    def clear_filter(self, view: str) -> None:
        spec = self.filter_spec(view)
        spec.term = ""
        spec.label_selector = ""

    def append_filter_history(self, view: str, term: str) -> list[str]:
        """Record ``term`` for later recall, keeping at most ``filter_history_max`` entries."""
        history = self.filter_spec(view).history
        if term:
            history.append(term)
        overflow = len(history) - self.filter_history_max
        if overflow > 0:
            del history[:overflow]
        return list(history)

    def restore_filter_history(self, stored: dict[str, list[str]]) -> None:
        for view, terms in stored.items():
            self.filter_spec(view).history = list(terms)[-self.filter_history_max:]

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def apply(
        self,
        view: str,
        headers: Sequence[str],
        rows: Iterable[ListingRow],
    ) -> list[ListingRow]:
        """Filter, sort and mark selection on ``rows`` for ``view``."""
        self.register_sortable_columns(view, headers)
        visible = filter_rows(rows, self.filter_spec(view).term)
        visible = sort_rows(visible, headers, self.sort_spec(view))
        return [
            ListingRow(
                name=row.name,
                namespace=row.namespace,
                cells=row.cells,
                selected=self.selection.contains(row.name, row.namespace),
            )
            for row in visible
        ]

    def reset(self) -> None:
        self.selection.clear()
        self.history.clear()
        self._sort.clear()
        self._filters.clear()


def filter_rows(rows: Iterable[ListingRow], term: str) -> list[ListingRow]:
    """Keep rows where any cell contains ``term`` (case-insensitive)."""
    needle = term.strip().lower()
    if not needle:
        return list(rows)
    return [row for row in rows if any(needle in cell.lower() for cell in row.cells)]


def _sort_value(value: str) -> tuple[int, float, str]:
    try:
        return (0, float(value), "")
    except (ValueError, TypeError):
        return (1, 0.0, str(value).lower())


def sort_rows(
    rows: Iterable[ListingRow],
    headers: Sequence[str],
    spec: SortSpec,
) -> list[ListingRow]:
    """Order rows by the spec's column; numbers sort before text."""
    ordered = list(rows)
    if spec.column is None or spec.column not in headers:
        return ordered
    index = list(headers).index(spec.column)
    ordered.sort(
        key=lambda row: _sort_value(row.cells[index]) if index < len(row.cells) else (2, 0.0, ""),
        reverse=spec.order is SortOrder.DESC,
    )
    return ordered


__all__ = [
    "FilterSpec",
    "NavigationHistory",
    "SelectionSet",
    "SessionState",
    "SortSpec",
    "filter_rows",
    "sort_rows",
]
