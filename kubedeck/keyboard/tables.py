"""DataTable keyboard bindings."""

from textual.binding import Binding

DATA_TABLE_BINDINGS: list[Binding] = [
    Binding("j", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
    Binding("g", "scroll_top", "Top", show=False),
    Binding("G", "scroll_bottom", "Bottom", show=False),
]

__all__ = [
    "DATA_TABLE_BINDINGS",
]
