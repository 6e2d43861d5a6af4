"""Feedback widgets: modal dialogs."""

from kubedeck.widgets.feedback.custom_dialog import CustomConfirmDialog, CustomInputDialog

__all__ = [
    "CustomConfirmDialog",
    "CustomInputDialog",
]
