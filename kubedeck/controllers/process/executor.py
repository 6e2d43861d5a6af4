"""Process executor - spawns external commands for fetches and actions.

Three flavours are offered:

- :meth:`ProcessExecutor.run_sync` blocks until the process exits. Use it only
  for short, user-initiated one-shot fetches.
- :meth:`ProcessExecutor.run_async` returns a :class:`ProcessHandle` right after
  spawning; output is pumped on the event loop and handed to callbacks.
- :meth:`ProcessExecutor.run_terminal` runs with inherited stdio for
  interactive sessions (``exec``/``debug``).

Every flavour resolves the command through :meth:`configure_command`, which
prepends the configured kubectl defaults and builds a clean environment that
only forwards ``PATH`` and ``HOME`` from the caller.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import re
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from kubedeck.constants.defaults import KUBECTL_CMD_DEFAULT
from kubedeck.constants.enums import NotifySeverity
from kubedeck.controllers.base import LoggingNotifier, Notifier, notify
from kubedeck.models.state.app_settings import KubectlCommandSettings

logger = logging.getLogger(__name__)

_FORWARDED_ENV = ("PATH", "HOME")
_ENV_REFERENCE = re.compile(r"\$(\w+)")
_READ_CHUNK_SIZE = 4096

OutputCallback = Callable[[str], None]


class ProcessError(Exception):
    """Base exception for process execution errors."""


class SpawnError(ProcessError):
    """Raised when a process could not be started."""


@dataclass(frozen=True)
class CommandSpec:
    """Resolved argument vector and environment for one invocation."""

    argv: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a finished process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessHandle:
    """Handle to an asynchronously running process."""

    def __init__(
        self,
        command: CommandSpec,
        process: asyncio.subprocess.Process,
        task: asyncio.Task[ProcessResult],
    ) -> None:
        self.command = command
        self._process = process
        self._task = task

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    def done(self) -> bool:
        return self._task.done()

    def terminate(self) -> None:
        """Stop the underlying process if it is still running."""
        if self._process.returncode is None:
            try:
                self._process.terminate()
            except ProcessLookupError:
                pass

    async def wait(self) -> ProcessResult:
        """Wait for exit and return the collected output."""
        return await asyncio.shield(self._task)


class ProcessExecutor:
    """Runs external commands with merged configuration."""

    def __init__(
        self,
        kubectl: KubectlCommandSettings | None = None,
        notifier: Notifier | None = None,
        *,
        context: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            kubectl: Base command configuration applied to ``kubectl`` calls.
            notifier: Sink for user-visible errors.
            context: Optional kubeconfig context passed as ``--context``.
            environ: Environment used for forwarding and ``$NAME`` expansion.
                Defaults to the live ``os.environ``.
        """
        self.kubectl = kubectl or KubectlCommandSettings()
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.context = context
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    # ------------------------------------------------------------------
    # Command resolution
    # ------------------------------------------------------------------

    def _expand(self, value: str) -> str:
        environ = self.environ
        return _ENV_REFERENCE.sub(lambda match: environ.get(match.group(1), match.group(0)), value)

    def configure_command(
        self,
        cmd: str,
        env: Mapping[str, str] | None = None,
        args: Sequence[str] | None = None,
    ) -> CommandSpec:
        """Resolve ``cmd`` and ``args`` into a concrete command.

        For ``kubectl`` the configured binary replaces the name and its
        default args come before ``args``. The environment is built from the
        configured defaults, then ``PATH``/``HOME`` of the caller, then
        ``env``; ``$NAME`` references are expanded against the caller's
        environment.
        """
        resolved_env: dict[str, str] = {}
        resolved_args: list[str] = []

        if cmd == KUBECTL_CMD_DEFAULT:
            cmd = self.kubectl.cmd
            resolved_args.extend(self.kubectl.args)
            resolved_env.update(self.kubectl.env)
            if self.context:
                resolved_args.extend(["--context", self.context])

        for key in _FORWARDED_ENV:
            if key in self.environ:
                resolved_env[key] = self.environ[key]

        if env:
            resolved_env.update(env)

        if args:
            resolved_args.extend(args)

        command = CommandSpec(
            argv=(cmd, *resolved_args),
            env={key: self._expand(value) for key, value in resolved_env.items()},
        )
        logger.debug("Resolved command: %s", command.describe())
        return command

    def _spawn_failed(self, command: CommandSpec, exc: OSError) -> SpawnError:
        message = f"Failed to execute {command.argv[0]}: {exc}"
        notify(self.notifier, message, NotifySeverity.ERROR)
        return SpawnError(message)

    # ------------------------------------------------------------------
    # Synchronous
    # ------------------------------------------------------------------

    def run_sync(
        self,
        cmd: str,
        args: Sequence[str] = (),
        *,
        env: Mapping[str, str] | None = None,
        stdin: str | None = None,
        on_stdout: OutputCallback | None = None,
    ) -> ProcessResult:
        """Run a command to completion.

        The result is returned whatever the exit status. A non-zero exit with
        stderr text also produces an error notification.

        Raises:
            SpawnError: The process could not be started.
        """
        command = self.configure_command(cmd, env, args)
        try:
            completed = subprocess.run(
                list(command.argv),
                input=stdin,
                capture_output=True,
                text=True,
                env=command.env,
                check=False,
            )
        except OSError as exc:
            raise self._spawn_failed(command, exc) from exc

        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if stdout and on_stdout is not None:
            on_stdout(stdout)
        if completed.returncode != 0 and stderr:
            notify(self.notifier, stderr, NotifySeverity.ERROR)
        return ProcessResult(stdout=stdout, stderr=stderr, returncode=completed.returncode)

    # ------------------------------------------------------------------
    # Asynchronous
    # ------------------------------------------------------------------

    async def run_async(
        self,
        cmd: str,
        args: Sequence[str] = (),
        on_exit: OutputCallback | None = None,
        on_stdout: OutputCallback | None = None,
        on_stderr: OutputCallback | None = None,
        *,
        env: Mapping[str, str] | None = None,
        stdin: str | None = None,
    ) -> ProcessHandle:
        """Start a command and return immediately.

        stdout chunks are accumulated in arrival order and streamed to
        ``on_stdout``; the accumulated stdout goes to ``on_exit`` once the
        process ends. stderr chunks go to ``on_stderr`` when given, otherwise
        each chunk becomes an error notification.

        Raises:
            SpawnError: The process could not be started.
        """
        command = self.configure_command(cmd, env, args)
        try:
            process = await asyncio.create_subprocess_exec(
                *command.argv,
                env=command.env,
                stdin=subprocess.PIPE if stdin is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise self._spawn_failed(command, exc) from exc

        if on_stderr is None:
            def on_stderr(chunk: str) -> None:
                notify(self.notifier, chunk, NotifySeverity.ERROR)

        task = asyncio.create_task(
            self._collect(process, stdin, on_exit, on_stdout, on_stderr),
            name=f"process-{process.pid}",
        )
        return ProcessHandle(command, process, task)

    @staticmethod
    async def _pump(
        stream: asyncio.StreamReader | None,
        sink: list[str],
        callback: OutputCallback | None,
    ) -> None:
        if stream is None:
            return
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = await stream.read(_READ_CHUNK_SIZE)
            text = decoder.decode(chunk, final=not chunk)
            if text:
                sink.append(text)
                if callback is not None:
                    callback(text)
            if not chunk:
                return

    async def _collect(
        self,
        process: asyncio.subprocess.Process,
        stdin: str | None,
        on_exit: OutputCallback | None,
        on_stdout: OutputCallback | None,
        on_stderr: OutputCallback | None,
    ) -> ProcessResult:
        if stdin is not None and process.stdin is not None:
            process.stdin.write(stdin.encode("utf-8"))
            try:
                await process.stdin.drain()
            except (BrokenPipeError, ConnectionResetError):
                logger.debug("Process %s closed stdin early", process.pid)
            process.stdin.close()

        stdout: list[str] = []
        stderr: list[str] = []
        await asyncio.gather(
            self._pump(process.stdout, stdout, on_stdout),
            self._pump(process.stderr, stderr, on_stderr),
        )
        returncode = await process.wait()
        result = ProcessResult(stdout="".join(stdout), stderr="".join(stderr), returncode=returncode)
        logger.debug("Process %s exited with %s", process.pid, returncode)
        if on_exit is not None:
            on_exit(result.stdout)
        return result

    # ------------------------------------------------------------------
    # Terminal
    # ------------------------------------------------------------------

    def run_terminal(
        self,
        cmd: str,
        args: Sequence[str] = (),
        *,
        env: Mapping[str, str] | None = None,
        prefix: Sequence[str] = (),
    ) -> int:
        """Run an interactive command attached to the current terminal.

        Args:
            prefix: Optional external terminal command placed before the
                resolved argument vector (e.g. ``("wezterm", "start", "--")``).

        Returns:
            The exit status.
        """
        command = self.configure_command(cmd, env, args)
        argv = [*prefix, *command.argv]
        try:
            completed = subprocess.run(argv, env=command.env, check=False)
        except OSError as exc:
            raise self._spawn_failed(command, exc) from exc

        if completed.returncode == 0:
            notify(self.notifier, "Command executed successfully")
        else:
            notify(
                self.notifier,
                f"Command failed with exit code {completed.returncode}",
                NotifySeverity.ERROR,
            )
        return completed.returncode


__all__ = [
    "CommandSpec",
    "ProcessError",
    "ProcessExecutor",
    "ProcessHandle",
    "ProcessResult",
    "SpawnError",
]
