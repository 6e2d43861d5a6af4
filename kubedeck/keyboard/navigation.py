"""Screen-specific keyboard bindings."""

from textual.binding import Binding

# ============================================================================
# Main listing
# ============================================================================

RESOURCE_SCREEN_BINDINGS: list[Binding] = [
    Binding("r", "refresh", "Refresh"),
    Binding("d", "describe", "Describe"),
    Binding("y", "show_yaml", "Yaml"),
    Binding("e", "edit", "Edit"),
    Binding("D", "delete", "Delete"),
    Binding("s", "sort", "Sort"),
    Binding("space", "toggle_select", "Select"),
    Binding("/", "filter", "Filter"),
    Binding("L", "label_filter", "Labels"),
    Binding("F", "clear_filter", "Clear filter"),
    Binding("H", "toggle_headers", "Hints", show=False),
    Binding("enter", "open_containers", "Containers", show=False),
]

# ============================================================================
# Floating detail
# ============================================================================

DETAIL_SCREEN_BINDINGS: list[Binding] = [
    Binding("escape", "close", "Close", priority=True),
    Binding("q", "close", "Close", show=False),
    Binding("r", "refresh", "Refresh"),
    Binding("l", "logs", "Logs"),
    Binding("x", "exec", "Exec"),
    Binding("b", "debug", "Debug"),
    Binding("p", "toggle_previous", "Previous"),
    Binding("h", "log_since", "History"),
]

__all__ = [
    "DETAIL_SCREEN_BINDINGS",
    "RESOURCE_SCREEN_BINDINGS",
]
