"""View orchestrator - resolves views and runs user actions against them.

The orchestrator is the single entry point the host calls for user actions.
It resolves the current view name to a behavior through the registry,
reads the focused resource through ``get_current_selection`` and composes
the fetch engine, session state, event dispatcher and action workflows.

A missing selection is never an error: the action is skipped and the user
gets an informational notification.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Awaitable, Callable, Coroutine, Sequence
from typing import Any

from kubedeck.constants.defaults import NAMESPACE_ALL
from kubedeck.constants.enums import EventType, NotifySeverity, Syntax
from kubedeck.controllers.actions import ActionResult, ActionWorkflow, EditWorkflow
from kubedeck.controllers.base import notify
from kubedeck.controllers.events import EventDispatcher, match_resource
from kubedeck.controllers.fetch import ResourceBuilder
from kubedeck.models.definitions import Hint, ViewDefinition
from kubedeck.models.snapshot import ListingRow, ResourceSnapshot
from kubedeck.models.state.app_settings import AppSettings
from kubedeck.models.state.config_manager import FILTER_HISTORY_KEY, ConfigManager
from kubedeck.models.state.view_state import SessionState
from kubedeck.views.base import ResourceView
from kubedeck.views.containers import ContainersView
from kubedeck.views.host import DisplaySurface, Host
from kubedeck.views.registry import ViewRegistry, default_registry, normalize_view_name

logger = logging.getLogger(__name__)

Reloader = Callable[[], Awaitable[Any]]


class ViewOrchestrator:
    """Composes views, state, fetches, events and workflows per user action."""

    def __init__(
        self,
        host: Host,
        session: SessionState,
        builder: ResourceBuilder,
        dispatcher: EventDispatcher,
        registry: ViewRegistry | None = None,
        *,
        settings: AppSettings | None = None,
        preferences: type[ConfigManager] | None = ConfigManager,
    ) -> None:
        self.host = host
        self.session = session
        self.builder = builder
        self.dispatcher = dispatcher
        self.registry = registry or default_registry()
        self.settings = settings or AppSettings()
        self._preferences = preferences
        self.current: str | None = None
        self._views: dict[str, ResourceView] = {}
        self._floats: dict[str, DisplaySurface] = {}
        self._reloaders: dict[str, Reloader] = {}
        self._tasks: set[asyncio.Task[Any]] = set()

        self.edit_workflow = EditWorkflow(builder, self.new_workflow(), host.edit_file)

    def new_workflow(self) -> ActionWorkflow:
        """Workflow for one action; overlapping actions never share a state machine."""
        return ActionWorkflow(
            self.builder.executor,
            self.host.confirm,
            self.host,
            suspend=self.host.suspend,
            terminal_prefix=shlex.split(self.settings.terminal_cmd),
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> ResourceView:
        """Return the behavior for ``name``, creating it on first use."""
        key = normalize_view_name(name)
        view = self._views.get(key)
        if view is None:
            factory = self.registry.factory(key)
            view = factory(self, self.registry.definition(key))
            self._views[key] = view
        return view

    @property
    def current_view(self) -> ResourceView | None:
        return self.resolve(self.current) if self.current else None

    def containers(self) -> ContainersView:
        view = self.resolve("containers")
        if not isinstance(view, ContainersView):
            raise TypeError("containers view is not registered")
        return view

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def report_no_selection(self, action: str = "") -> None:
        suffix = f" to {action}" if action else ""
        notify(self.host, f"Not a valid selection{suffix}")

    def report_missing(self, title: str) -> None:
        notify(self.host, f"Nothing to show for {title}", NotifySeverity.WARNING)

    def current_selection(self, action: str = "") -> tuple[str, str | None] | None:
        view = self.current_view
        selected = view.get_current_selection() if view is not None else None
        if selected is None:
            self.report_no_selection(action)
        return selected

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def open_view(self, name: str, *, push_history: bool = True) -> ResourceSnapshot | None:
        key = normalize_view_name(name)
        if push_history and self.session.history.peek() != key:
            self.session.history.push(key)
        self.current = key
        self._restore_filter_history(key)
        return await self.resolve(key).view()

    async def go_up(self) -> ResourceSnapshot | None:
        """Return to the previous view; a no-op at the first view."""
        if len(self.session.history) < 2:
            return None
        self.session.history.pop()
        previous = self.session.history.peek()
        if previous is None:
            return None
        return await self.open_view(previous, push_history=False)

    async def refresh(self) -> ResourceSnapshot | None:
        view = self.current_view
        if view is None:
            return None
        notify(self.host, f"Reloading {view.definition.title}")
        return await view.view()

    async def refresh_float(self, key: str) -> Any:
        reloader = self._reloaders.get(key)
        if reloader is None:
            return None
        return await reloader()

    def draw(self) -> None:
        view = self.current_view
        if view is not None:
            view.draw()

    def hints(self) -> tuple[Hint, ...]:
        view = self.current_view
        return view.definition.hints if view is not None else ()

    # ------------------------------------------------------------------
    # Floating surfaces
    # ------------------------------------------------------------------

    def show_float(
        self,
        key: str,
        title: str,
        snapshot: ResourceSnapshot,
        *,
        headers: Sequence[str] | None = None,
        rows: Sequence[ListingRow] | None = None,
    ) -> DisplaySurface:
        """Show ``snapshot`` on the floating surface for ``key``, reusing it while open."""
        surface = self._floats.get(key)
        if surface is None or not surface.is_open:
            surface = self.host.open_float(key, title)
            self._floats[key] = surface
        if headers is not None and rows is not None:
            surface.show_listing(snapshot, headers, rows)
        else:
            surface.show_text(snapshot)
        return surface

    def register_reloader(self, key: str, reloader: Reloader) -> None:
        """Remember how to re-fetch the floating surface ``key``."""
        self._reloaders[key] = reloader

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # ------------------------------------------------------------------
    # Actions on the focused resource
    # ------------------------------------------------------------------

    async def describe(self) -> ResourceSnapshot | None:
        """Describe the focused resource and keep it updated on MODIFIED events."""
        view = self.current_view
        selected = self.current_selection("describe")
        if view is None or selected is None:
            return None
        name, namespace = selected
        snapshot = await view.desc(name, namespace)
        if snapshot is None:
            return None

        key = view.desc_definition(name, namespace).resource
        surface = self._floats[key]
        self.register_reloader(key, lambda: view.desc(name, namespace, reload=True))
        self.dispatcher.subscribe(
            EventType.MODIFIED,
            surface.surface_id,
            match_resource(name, namespace, lambda: surface.is_open),
            lambda _event: self._spawn(view.desc(name, namespace, reload=True)),
        )
        return snapshot

    def yaml_definition(self, resource: str, name: str, namespace: str | None) -> ViewDefinition:
        args = ["get", resource, name, "-o", "yaml"]
        key = f"{resource}_{name}"
        if namespace:
            args.extend(["-n", namespace])
            key = f"{key}_{namespace}"
        return ViewDefinition(
            resource=key,
            url=tuple(args),
            syntax=Syntax.YAML,
            display_name=f"{resource} - {name}",
            ft="k8s_yaml",
        )

    async def show_yaml(self) -> ResourceSnapshot | None:
        view = self.current_view
        selected = self.current_selection("view")
        if view is None or selected is None:
            return None
        definition = self.yaml_definition(view.resource, *selected)
        snapshot = await self.builder.view_float(definition)
        if snapshot is None:
            self.report_missing(definition.title)
            return None
        self.show_float(definition.resource, definition.title, snapshot)
        self.register_reloader(definition.resource, self._yaml_reloader(definition))
        return snapshot

    def _yaml_reloader(self, definition: ViewDefinition) -> Reloader:
        async def reload() -> ResourceSnapshot | None:
            snapshot = await self.builder.view_float(definition, reload=True)
            if snapshot is not None:
                self.show_float(definition.resource, definition.title, snapshot)
            return snapshot

        return reload

    async def delete(self) -> ActionResult | None:
        view = self.current_view
        selected = self.current_selection("delete")
        if view is None or selected is None:
            return None
        name, namespace = selected
        args = ["delete", view.resource, name]
        if namespace:
            args.extend(["-n", namespace])
        result = await self.new_workflow().run(args)
        if result.executed:
            self._spawn(view.view())
        return result

    async def edit(self) -> ActionResult | None:
        view = self.current_view
        selected = self.current_selection("edit")
        if view is None or selected is None:
            return None
        return await self.edit_workflow.run(view.resource, *selected)

    async def open_containers(self) -> ResourceSnapshot | None:
        selected = self.current_selection("open")
        if selected is None:
            return None
        return await self.containers().open(*selected)

    def run_in_terminal(self, args: Sequence[str]) -> int:
        with self.host.suspend():
            return self.builder.executor.run_terminal("kubectl", args)

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------

    def sort(self, column: str) -> bool:
        """Sort the current view by ``column``; True when the column is sortable."""
        if self.current is None:
            return False
        if self.session.toggle_sort(self.current, column) is None:
            return False
        self.draw()
        return True

    def toggle_selection(self) -> bool:
        view = self.current_view
        selected = view.get_current_selection() if view is not None else None
        if selected is None:
            return False
        now_selected = self.session.selection.toggle(*selected)
        self.draw()
        return now_selected

    def set_filter(self, term: str) -> None:
        if self.current is None:
            return
        self.session.set_filter(self.current, term)
        history = self.session.append_filter_history(self.current, term.strip())
        self._save_filter_history(self.current, history)
        if term.strip():
            notify(self.host, f"filtering for.. {term.strip()}")
        self.draw()

    async def set_label_filter(self, selector: str) -> ResourceSnapshot | None:
        if self.current is None:
            return None
        self.session.set_label_filter(self.current, selector)
        return await self.refresh()

    async def clear_filter(self) -> ResourceSnapshot | None:
        if self.current is None:
            return None
        self.session.clear_filter(self.current)
        return await self.refresh()

    async def set_namespace(self, namespace: str) -> ResourceSnapshot | None:
        self.session.namespace = namespace.strip() or NAMESPACE_ALL
        self.settings.namespace = self.session.namespace
        return await self.refresh()

    def filter_history(self) -> list[str]:
        if self.current is None:
            return []
        return list(self.session.filter_spec(self.current).history)

    def _save_filter_history(self, view: str, history: list[str]) -> None:
        if self._preferences is None:
            return
        if not self._preferences.save_document({FILTER_HISTORY_KEY: {view: history}}):
            logger.warning("Could not persist filter history for %s", view)

    def _restore_filter_history(self, view: str) -> None:
        if self._preferences is None or self.session.filter_spec(view).history:
            return
        stored = self._preferences.load_filter_history().get(view)
        if stored:
            self.session.restore_filter_history({view: stored})

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_event(self, event: dict[str, Any]) -> int:
        """Route a received watch event to subscribed views."""
        return self.dispatcher.publish_event(event)


__all__ = [
    "ViewOrchestrator",
]
