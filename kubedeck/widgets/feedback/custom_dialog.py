"""Modal dialogs used for confirmations and one-line prompts.

Standard Reactive Pattern:
- Dialogs are modal screens, inherit from ModalScreen
- No reactive state needed (they manage their own lifecycle)

CSS Classes: widget-custom-dialog
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import suppress

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Resize
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

_DIALOG_MIN_WIDTH = 36
_DIALOG_SIDE_MARGIN = 6
_DIALOG_CONTENT_PADDING = 8

_DIALOG_CSS = """
ModalScreen.widget-custom-dialog {
    align: center middle;
}

.dialog-container {
    width: auto;
    height: auto;
    padding: 1 2;
    border: round $accent;
    background: $surface;
}

.dialog-title {
    text-style: bold;
    margin-bottom: 1;
}

.dialog-message {
    margin-bottom: 1;
}

.dialog-hint {
    color: $text-muted;
}

.dialog-buttons {
    height: auto;
    align: right middle;
}

.dialog-btn {
    margin-left: 1;
}
"""


def _max_line_width(*values: str) -> int:
    width = 0
    for value in values:
        for line in value.splitlines() or [""]:
            width = max(width, len(line))
    return width


def _apply_dialog_width(dialog: ModalScreen, content_width: int) -> None:
    available_width = max(
        _DIALOG_MIN_WIDTH,
        getattr(dialog.app.size, "width", _DIALOG_MIN_WIDTH + _DIALOG_SIDE_MARGIN)
        - _DIALOG_SIDE_MARGIN,
    )
    dialog_width = max(
        _DIALOG_MIN_WIDTH,
        min(content_width + _DIALOG_CONTENT_PADDING, available_width),
    )
    with suppress(Exception):
        container = dialog.query_one(".dialog-container", Vertical)
        container.styles.width = str(dialog_width)


class CustomConfirmDialog(ModalScreen[bool]):
    """Confirmation dialog with OK/Cancel buttons.

    Dismisses with ``True`` only when OK is pressed (or ``y`` typed).
    Escape, ``n`` and Cancel all dismiss with ``False``.
    """

    DEFAULT_CSS = _DIALOG_CSS
    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        message: str,
        title: str = "Confirm",
        on_confirm: Callable[[], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the confirmation dialog.

        Args:
            message: Message to display.
            title: Dialog title.
            on_confirm: Callback when confirmed.
            on_cancel: Callback when cancelled.
        """
        super().__init__(classes="widget-custom-dialog")
        self._message = message
        self._title = title
        self._on_confirm = on_confirm
        self._on_cancel = on_cancel

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._message, classes="dialog-message")
            with Horizontal(classes="dialog-buttons"):
                yield Button("OK", id="confirm-btn", variant="primary", classes="dialog-btn")
                yield Button("Cancel", id="cancel-btn", classes="dialog-btn")

    def on_mount(self) -> None:
        self._apply_dynamic_layout()

    def on_resize(self, _: Resize) -> None:
        self._apply_dynamic_layout()

    def _apply_dynamic_layout(self) -> None:
        _apply_dialog_width(self, max(_max_line_width(self._title, self._message), 24))

    def action_confirm(self) -> None:
        self.dismiss(True)
        if self._on_confirm:
            self._on_confirm()

    def action_cancel(self) -> None:
        self.dismiss(False)
        if self._on_cancel:
            self._on_cancel()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "confirm-btn":
            self.action_confirm()
        else:
            self.action_cancel()


class CustomInputDialog(ModalScreen[str | None]):
    """Single-line prompt; dismisses with the entered text or ``None``."""

    DEFAULT_CSS = _DIALOG_CSS
    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(
        self,
        prompt: str,
        title: str = "",
        value: str = "",
        history: Sequence[str] = (),
    ) -> None:
        super().__init__(classes="widget-custom-dialog")
        self._prompt = prompt
        self._title = title
        self._value = value
        self._history = tuple(history)

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog-container"):
            if self._title:
                yield Static(self._title, classes="dialog-title")
            yield Static(self._prompt, classes="dialog-message")
            yield Input(value=self._value, id="dialog-input")
            if self._history:
                yield Static(
                    "Recent: " + ", ".join(reversed(self._history)),
                    classes="dialog-hint",
                )

    def on_mount(self) -> None:
        _apply_dialog_width(
            self,
            max(_max_line_width(self._title, self._prompt), 40),
        )
        with suppress(Exception):
            self.query_one("#dialog-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = [
    "CustomConfirmDialog",
    "CustomInputDialog",
]
