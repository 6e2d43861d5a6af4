"""Confirm-then-execute workflows for mutating actions."""

from kubedeck.controllers.actions.workflow import (
    ActionResult,
    ActionStateError,
    ActionWorkflow,
    EditWorkflow,
    render_prompt,
)

__all__ = [
    "ActionResult",
    "ActionStateError",
    "ActionWorkflow",
    "EditWorkflow",
    "render_prompt",
]
