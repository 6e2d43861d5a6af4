"""Action workflows - confirm-then-execute for mutating commands.

Every mutating action (delete, apply after edit, debug session) goes through
:class:`ActionWorkflow`, a small state machine::

    IDLE -> AWAITING_CONFIRMATION -> EXECUTING -> DONE | FAILED
                     |
                     +-> IDLE   (declined)

The only way into ``EXECUTING`` is an explicit ``True`` from the
confirmation step, so nothing touches the cluster without it.
:class:`EditWorkflow` reuses the same machine with "was the file changed"
as its confirmation step.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from collections.abc import Awaitable, Callable, Sequence
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from pathlib import Path

from kubedeck.constants.enums import ActionState, NotifySeverity
from kubedeck.constants.timeouts import EDIT_CHECK_DELAY
from kubedeck.controllers.base import Notifier, notify
from kubedeck.controllers.fetch.resource_builder import ResourceBuilder
from kubedeck.controllers.process.executor import ProcessExecutor, SpawnError

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], Awaitable[bool]]
EditorFn = Callable[[Path], Awaitable[None]]

_TRANSITIONS: dict[ActionState, frozenset[ActionState]] = {
    ActionState.IDLE: frozenset({ActionState.AWAITING_CONFIRMATION}),
    ActionState.AWAITING_CONFIRMATION: frozenset({ActionState.IDLE, ActionState.EXECUTING}),
    ActionState.EXECUTING: frozenset({ActionState.DONE, ActionState.FAILED}),
    ActionState.DONE: frozenset({ActionState.IDLE}),
    ActionState.FAILED: frozenset({ActionState.IDLE}),
}


class ActionStateError(RuntimeError):
    """Raised on an illegal workflow transition."""


@dataclass(frozen=True)
class ActionResult:
    """Final state of one workflow run."""

    state: ActionState
    prompt: str
    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None

    @property
    def executed(self) -> bool:
        return self.state in (ActionState.DONE, ActionState.FAILED)


def render_prompt(cmd: str, args: Sequence[str]) -> str:
    """Literal rendering of the command shown before it runs."""
    return f"execute: {' '.join((cmd, *args))}"


class ActionWorkflow:
    """Confirm-then-execute state machine for one kind of action."""

    def __init__(
        self,
        executor: ProcessExecutor,
        confirm: ConfirmFn,
        notifier: Notifier | None = None,
        *,
        suspend: Callable[[], AbstractContextManager[object]] | None = None,
        terminal_prefix: Sequence[str] = (),
    ) -> None:
        """Initialize the workflow.

        Args:
            executor: Runs the confirmed command.
            confirm: Shows the prompt and resolves to the user's answer.
            notifier: Sink for outcome notifications.
            suspend: Context manager factory releasing the terminal for
                interactive commands.
            terminal_prefix: External terminal command; when set, interactive
                commands open there instead of in the suspended terminal.
        """
        self.executor = executor
        self._confirm = confirm
        self.notifier: Notifier = notifier or executor.notifier
        self._suspend = suspend or nullcontext
        self._terminal_prefix = tuple(terminal_prefix)
        self._state = ActionState.IDLE
        self.prompt = ""

    @property
    def state(self) -> ActionState:
        return self._state

    @property
    def busy(self) -> bool:
        """True while a run is waiting for confirmation or executing."""
        return self._state in (ActionState.AWAITING_CONFIRMATION, ActionState.EXECUTING)

    def _transition(self, target: ActionState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise ActionStateError(f"Cannot go from {self._state.value} to {target.value}")
        logger.debug("Workflow %s -> %s", self._state.value, target.value)
        self._state = target

    def _finish(self, target: ActionState, **fields: object) -> ActionResult:
        self._transition(target)
        return ActionResult(state=target, prompt=self.prompt, **fields)  # type: ignore[arg-type]

    async def run(
        self,
        args: Sequence[str],
        *,
        cmd: str = "kubectl",
        prompt: str | None = None,
        confirm: ConfirmFn | None = None,
        interactive: bool = False,
        stdin: str | None = None,
    ) -> ActionResult:
        """Ask for confirmation, then execute ``cmd args``.

        Args:
            confirm: Overrides the confirmation step for this run.
            interactive: Attach the command to a terminal instead of
                capturing its output.
        """
        requested = prompt or render_prompt(cmd, args)
        if self.busy:
            notify(self.notifier, f"Another action is still running: {self.prompt}")
            return ActionResult(state=ActionState.IDLE, prompt=requested)
        if self._state in (ActionState.DONE, ActionState.FAILED):
            self._transition(ActionState.IDLE)

        self.prompt = requested
        self._transition(ActionState.AWAITING_CONFIRMATION)
        confirmed = await (confirm or self._confirm)(self.prompt)
        if confirmed is not True:
            logger.debug("Declined: %s", self.prompt)
            self._transition(ActionState.IDLE)
            return ActionResult(state=ActionState.IDLE, prompt=self.prompt)

        self._transition(ActionState.EXECUTING)
        if interactive:
            return await self._execute_interactive(cmd, args)
        return await self._execute(cmd, args, stdin)

    async def _execute(self, cmd: str, args: Sequence[str], stdin: str | None) -> ActionResult:
        stderr: list[str] = []
        try:
            handle = await self.executor.run_async(cmd, args, on_stderr=stderr.append, stdin=stdin)
        except SpawnError as exc:
            return self._finish(ActionState.FAILED, stderr=str(exc))

        result = await handle.wait()
        if result.ok:
            notify(self.notifier, result.stdout.strip() or f"{cmd} completed")
            if result.stderr.strip():
                notify(self.notifier, result.stderr.strip(), NotifySeverity.WARNING)
            return self._finish(
                ActionState.DONE,
                stdout=result.stdout,
                stderr=result.stderr,
                returncode=result.returncode,
            )

        notify(
            self.notifier,
            result.stderr.strip() or f"{cmd} exited with status {result.returncode}",
            NotifySeverity.ERROR,
        )
        return self._finish(
            ActionState.FAILED,
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )

    async def _execute_interactive(self, cmd: str, args: Sequence[str]) -> ActionResult:
        try:
            if self._terminal_prefix:
                handle = await self.executor.run_async(
                    self._terminal_prefix[0],
                    [*self._terminal_prefix[1:], *self.executor.configure_command(cmd, None, args).argv],
                )
                returncode = (await handle.wait()).returncode
            else:
                with self._suspend():
                    returncode = self.executor.run_terminal(cmd, args)
        except SpawnError as exc:
            return self._finish(ActionState.FAILED, stderr=str(exc))
        target = ActionState.DONE if returncode == 0 else ActionState.FAILED
        return self._finish(target, returncode=returncode)


class EditWorkflow:
    """Fetch as YAML, hand to an editor, apply if the file was changed.

    Change detection compares the file's modification time before and after
    editing. Touching the file without changing it therefore still counts as
    an edit.
    """

    def __init__(
        self,
        builder: ResourceBuilder,
        workflow: ActionWorkflow,
        open_editor: EditorFn,
        *,
        tmp_dir: Path | None = None,
        check_delay: float = EDIT_CHECK_DELAY,
    ) -> None:
        self.builder = builder
        self.workflow = workflow
        self._open_editor = open_editor
        self._tmp_dir = tmp_dir
        self._check_delay = check_delay

    @property
    def notifier(self) -> Notifier:
        return self.workflow.notifier

    def temp_path(self, name: str, namespace: str | None) -> Path:
        """Create a unique temp file named after the resource."""
        handle, path = tempfile.mkstemp(
            prefix="kubedeck-",
            suffix=f"-{name}-{namespace}.yaml",
            dir=self._tmp_dir,
        )
        os.close(handle)
        return Path(path)

    async def run(self, resource: str, name: str | None, namespace: str | None) -> ActionResult:
        if not name:
            notify(self.notifier, "Not a valid selection to edit")
            return ActionResult(state=ActionState.IDLE, prompt="")

        args = ["get", f"{resource}/{name}", "-o", "yaml"]
        if namespace:
            args.extend(["-n", namespace])
        snapshot = self.builder.fetch_sync(
            self.builder.set_command(args, resource="edit_resource")
        )
        if snapshot is None:
            notify(self.notifier, f"Failed to fetch {resource}/{name}", NotifySeverity.ERROR)
            return ActionResult(state=ActionState.IDLE, prompt="")

        path = self.temp_path(name, namespace)
        path.write_text(snapshot.raw, encoding="utf-8")
        original_mtime = path.stat().st_mtime_ns
        notify(self.notifier, f"editing {path}")

        await self._open_editor(path)
        await asyncio.sleep(self._check_delay)

        async def was_edited(_: str) -> bool:
            if path.stat().st_mtime_ns == original_mtime:
                notify(self.notifier, "Not Edited")
                return False
            notify(self.notifier, "Edited. Applying changes")
            return True

        return await self.workflow.run(["apply", "-f", str(path)], confirm=was_edited)


__all__ = [
    "ActionResult",
    "ActionStateError",
    "ActionWorkflow",
    "EditWorkflow",
    "render_prompt",
]
