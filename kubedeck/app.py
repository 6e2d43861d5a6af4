"""Main application class for the kubedeck TUI."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import subprocess
from collections.abc import Coroutine, Sequence
from pathlib import Path
from typing import Any

from textual.app import App
from textual.binding import Binding
from textual.worker import Worker

from kubedeck.constants import APP_TITLE
from kubedeck.constants.defaults import EDITOR_FALLBACK
from kubedeck.controllers.events import EventDispatcher
from kubedeck.controllers.fetch import ApiProxy, ClusterApiClient, ResourceBuilder
from kubedeck.controllers.process import ProcessExecutor
from kubedeck.keyboard.app import APP_BINDINGS
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.models.state.config_manager import (
    ConfigLoadError,
    ConfigManager,
    ConfigSaveError,
)
from kubedeck.models.state.view_state import SessionState
from kubedeck.screens import DetailScreen, ResourceScreen
from kubedeck.views import ViewOrchestrator
from kubedeck.views.host import DisplaySurface
from kubedeck.widgets import CustomConfirmDialog, CustomInputDialog

logger = logging.getLogger(__name__)


class KubeDeckApp(App[None]):
    """Main TUI application for kubedeck.

    The app is the host for the view orchestrator: it provides notifications,
    confirmation and input prompts, the main and floating display surfaces,
    and terminal hand-off for editors and interactive sessions.
    """

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings

    def __init__(
        self,
        view: str = "pods",
        context: str | None = None,
        namespace: str | None = None,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.initial_view = view
        self.context = context
        self.initial_namespace = namespace
        self._load_settings()

        self.executor = ProcessExecutor(
            self.settings.kubectl_cmd, self, context=self.settings.context
        )
        self.api_client = ClusterApiClient(timeout=self.settings.request_timeout)
        self.builder = ResourceBuilder(
            self.executor,
            self.api_client,
            api_base=self.settings.api_base,
            notifier=self,
        )
        self.session = SessionState(
            namespace=self.settings.namespace,
            filter_history_max=self.settings.filter_history_max,
        )
        self.dispatcher = EventDispatcher()
        self.proxy = ApiProxy(self.executor)
        self._main_screen = ResourceScreen(self.session.sort_spec, self.settings.headers)
        self.orchestrator = ViewOrchestrator(
            self,
            self.session,
            self.builder,
            self.dispatcher,
            settings=self.settings,
        )

    def _load_settings(self) -> None:
        """Load application settings from persistent storage."""
        try:
            self.settings = ConfigManager.load()
        except ConfigLoadError:
            logger.warning("Invalid stored settings, using defaults")
            self.settings = AppSettings()

        # Apply CLI overrides if provided
        if self.context:
            self.settings.context = self.context
        if self.initial_namespace:
            self.settings.namespace = self.initial_namespace

    # ------------------------------------------------------------------
    # Host
    # ------------------------------------------------------------------

    @property
    def main_surface(self) -> DisplaySurface:
        return self._main_screen

    async def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; only an explicit OK resolves to True."""
        answer: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        def resolve(result: bool | None) -> None:
            if not answer.done():
                answer.set_result(result is True)

        self.push_screen(CustomConfirmDialog(prompt), resolve)
        return await answer

    async def prompt(
        self,
        prompt: str,
        *,
        title: str = "",
        value: str = "",
        history: Sequence[str] = (),
    ) -> str | None:
        """Ask for one line of input; None when cancelled."""
        answer: asyncio.Future[str | None] = asyncio.get_running_loop().create_future()

        def resolve(result: str | None) -> None:
            if not answer.done():
                answer.set_result(result)

        self.push_screen(
            CustomInputDialog(prompt, title=title, value=value, history=history),
            resolve,
        )
        return await answer

    def open_float(self, key: str, title: str) -> DisplaySurface:
        screen = DetailScreen(key, title)
        self.push_screen(screen)
        return screen

    def editor_command(self, path: Path) -> list[str]:
        editor = self.settings.editor or os.environ.get("EDITOR") or EDITOR_FALLBACK
        return [*shlex.split(editor), str(path)]

    async def edit_file(self, path: Path) -> None:
        """Hand the terminal to the user's editor until it exits."""
        argv = self.editor_command(path)
        try:
            with self.suspend():
                subprocess.run(argv, check=False)
        except OSError as exc:
            self.notify(f"Failed to start editor {argv[0]}: {exc}", severity="error")

    def run_action(self, action: Coroutine[Any, Any, Any]) -> Worker[Any]:
        """Run an orchestrator coroutine off the message loop.

        Actions may wait on dialogs, which need the message loop free.
        """
        return self.run_worker(action, group="actions", exit_on_error=False)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.dispatcher.bind(asyncio.get_running_loop())
        self.push_screen(self._main_screen)
        self.run_action(self._start())

    async def _start(self) -> None:
        if self.settings.auto_proxy:
            base = await self.proxy.start()
            if base:
                self.builder.api_base = base
                self.settings.api_base = base
            else:
                self.notify(
                    f"kubectl proxy unavailable, using {self.builder.api_base}",
                    severity="warning",
                )
        await self.orchestrator.open_view(self.initial_view)

    def on_unmount(self) -> None:
        """Stop background processes and save settings when app exits."""
        self.proxy.stop()
        self.dispatcher.clear()
        self.session.reset()
        self.api_client.close()
        try:
            ConfigManager.save(self.settings)
        except ConfigSaveError as e:
            logger.error("Failed to save settings: %s", e)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_back(self) -> None:
        """Close the top floating surface, or go to the previous view."""
        if isinstance(self.screen, DetailScreen):
            self.screen.action_close()
            return
        if isinstance(self.screen, (CustomConfirmDialog, CustomInputDialog)):
            self.screen.action_cancel()
            return
        self.run_action(self.orchestrator.go_up())

    def action_prompt_view(self) -> None:
        self.run_action(self._prompt_view())

    async def _prompt_view(self) -> None:
        name = await self.prompt("View:", value=self.orchestrator.current or "")
        if name and name.strip():
            await self.orchestrator.open_view(name)

    def action_prompt_namespace(self) -> None:
        self.run_action(self._prompt_namespace())

    async def _prompt_namespace(self) -> None:
        namespace = await self.prompt(
            "Namespace (All for every namespace):", value=self.session.namespace
        )
        if namespace is not None:
            await self.orchestrator.set_namespace(namespace)

    def action_show_help(self) -> None:
        """Show the key hints of the current view."""
        hints = self.orchestrator.hints()
        lines = [f"  {hint.key}: {hint.desc}" for hint in hints]
        self.notify(
            "\n".join(["Keybindings:", *lines, "  : : View", "  ctrl+n: Namespace", "  q: Quit"]),
            severity="information",
            title="Help",
        )

    def action_quit(self) -> None:  # type: ignore[override]
        """Quit the application."""
        self.exit()


__all__ = [
    "KubeDeckApp",
]
