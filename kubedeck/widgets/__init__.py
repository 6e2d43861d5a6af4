"""Widgets for the kubedeck TUI."""

from kubedeck.widgets.data import ResourceTable
from kubedeck.widgets.feedback import CustomConfirmDialog, CustomInputDialog

__all__ = [
    "CustomConfirmDialog",
    "CustomInputDialog",
    "ResourceTable",
]
