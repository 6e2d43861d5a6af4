"""Tests for CustomDialog widgets."""

from __future__ import annotations

from textual.screen import ModalScreen

from kubedeck.widgets.feedback.custom_dialog import (
    CustomConfirmDialog,
    CustomInputDialog,
    _max_line_width,
)


def test_custom_confirm_dialog_instantiation():
    """Test CustomConfirmDialog instantiation."""
    dialog = CustomConfirmDialog(message="execute: kubectl delete pods nginx")
    assert isinstance(dialog, ModalScreen)
    assert dialog._message == "execute: kubectl delete pods nginx"
    assert dialog._title == "Confirm"
    assert dialog.has_class("widget-custom-dialog")


def test_custom_confirm_dialog_with_callbacks():
    """Test CustomConfirmDialog with callbacks."""
    confirm_called = []
    cancel_called = []

    def on_confirm():
        confirm_called.append(True)

    def on_cancel():
        cancel_called.append(True)

    dialog = CustomConfirmDialog(
        message="Test",
        on_confirm=on_confirm,
        on_cancel=on_cancel,
    )
    assert dialog._on_confirm is on_confirm
    assert dialog._on_cancel is on_cancel


def test_custom_confirm_dialog_bindings():
    """y confirms; n and escape cancel."""
    actions = {binding.key: binding.action for binding in CustomConfirmDialog.BINDINGS}
    assert actions == {"y": "confirm", "n": "cancel", "escape": "cancel"}


def test_custom_input_dialog_keeps_history_order():
    dialog = CustomInputDialog("Filter:", value="ngi", history=["a", "b"])
    assert dialog._value == "ngi"
    assert dialog._history == ("a", "b")


def test_max_line_width():
    assert _max_line_width("short", "a longer line\nx") == len("a longer line")
    assert _max_line_width("") == 0
