"""Containers of a pod: listing, logs, exec and debug sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from kubedeck.constants.defaults import DEBUG_IMAGE_DEFAULT, DEBUG_SHELL_DEFAULT
from kubedeck.constants.enums import Syntax
from kubedeck.constants.values import BASE_PLACEHOLDER, COLUMN_NAME
from kubedeck.controllers.actions import ActionResult, render_prompt
from kubedeck.controllers.fetch.resource_builder import log_since_seconds
from kubedeck.models.definitions import Hint, ViewDefinition
from kubedeck.models.snapshot import ListingRow, ResourceSnapshot
from kubedeck.views.base import ResourceView

if TYPE_CHECKING:
    from kubedeck.views.host import DisplaySurface
    from kubedeck.views.orchestrator import ViewOrchestrator

logger = logging.getLogger(__name__)


def _container_state(status: dict[str, Any]) -> str:
    state = status.get("state")
    if isinstance(state, dict) and state:
        return next(iter(state)).capitalize()
    return ""


class ContainersView(ResourceView):
    """Floating listing of one pod's containers."""

    HEADERS: ClassVar[tuple[str, ...]] = (COLUMN_NAME, "IMAGE", "READY", "STATE", "RESTARTS")

    def __init__(self, orchestrator: ViewOrchestrator, definition: ViewDefinition) -> None:
        super().__init__(orchestrator, definition)
        self.pod: str | None = None
        self.namespace: str | None = None
        self.selection = ""
        self.log_since = orchestrator.settings.logs.since
        self.show_previous = False
        self._surface: DisplaySurface | None = None

    @property
    def resource(self) -> str:
        return "pods"

    @property
    def surface_key(self) -> str:
        return f"containers_view_{self.pod}_{self.namespace}"

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def rows(self, snapshot: ResourceSnapshot) -> list[ListingRow]:
        pod = snapshot.data if isinstance(snapshot.data, dict) else {}
        spec = pod.get("spec") or {}
        statuses = {
            status.get("name"): status
            for status in (pod.get("status") or {}).get("containerStatuses") or []
        }
        rows = []
        for container in spec.get("containers") or []:
            name = str(container.get("name", ""))
            status = statuses.get(name, {})
            rows.append(
                ListingRow(
                    name=name,
                    namespace=self.namespace,
                    cells=(
                        name,
                        str(container.get("image", "")),
                        str(status.get("ready", False)).lower(),
                        _container_state(status),
                        str(status.get("restartCount", 0)),
                    ),
                )
            )
        return rows

    async def open(self, pod: str, namespace: str | None) -> ResourceSnapshot | None:
        self.pod = pod
        self.namespace = namespace
        self.selection = ""
        return await self.view()

    async def view(self) -> ResourceSnapshot | None:
        if not self.pod:
            self._orch.report_no_selection()
            return None
        definition = self.definition.with_overrides(display_name=self.pod)
        snapshot = await self._orch.builder.fetch(
            definition,
            name=self.pod,
            namespace=self.namespace,
            floating=True,
        )
        if snapshot is None:
            self._orch.report_missing(definition.title)
            return None
        self.snapshot = snapshot
        self.draw()
        return snapshot

    def draw(self) -> None:
        if self.snapshot is None:
            return
        rows = self._orch.session.apply(self.name, self.HEADERS, self.rows(self.snapshot))
        self._surface = self._orch.show_float(
            self.surface_key,
            f"containers - {self.pod}",
            self.snapshot,
            headers=self.HEADERS,
            rows=rows,
        )
        self._orch.register_reloader(self.surface_key, self.view)

    def get_current_selection(self) -> tuple[str, str | None] | None:
        if self._surface is None or not self._surface.is_open:
            return None
        row = self._surface.focused_row()
        if row is None or not row.name:
            return None
        return row.name, self.namespace

    def select_container(self, name: str) -> None:
        self.selection = name

    def _require_container(self) -> bool:
        if not self.selection:
            selected = self.get_current_selection()
            if selected is not None:
                self.selection = selected[0]
        if not self.pod or not self.selection:
            self._orch.report_no_selection()
            return False
        return True

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def logs_definition(self) -> ViewDefinition:
        url = (
            f"{BASE_PLACEHOLDER}/api/v1/namespaces/{self.namespace}/pods/{self.pod}"
            f"/log/?container={self.selection}&pretty=true"
            f"&sinceSeconds={log_since_seconds(self.log_since)}"
            f"&previous={str(self.show_previous).lower()}"
        )
        return ViewDefinition(
            resource=f"containerLogs_{self.pod}_{self.selection}",
            url=(url,),
            syntax=Syntax.LOGS,
            display_name=f"logs - {self.pod}/{self.selection}",
            ft="k8s_container_logs",
            hints=(
                Hint("f", "Follow"),
                Hint("h", f"History [{self.log_since}]"),
                Hint("w", "Wrap"),
                Hint("p", f"Previous[{str(self.show_previous).lower()}]"),
            ),
        )

    async def logs(self, reload: bool = False) -> ResourceSnapshot | None:
        if not self._require_container():
            return None
        definition = self.logs_definition()
        snapshot = await self._orch.builder.view_float(definition, reload=reload)
        if snapshot is None:
            self._orch.report_missing(definition.title)
            return None
        self._orch.show_float(definition.resource, definition.title, snapshot)
        self._orch.register_reloader(definition.resource, lambda: self.logs(reload=True))
        return snapshot

    def set_log_since(self, since: str) -> None:
        self.log_since = since.strip() or self.log_since

    def toggle_previous(self) -> bool:
        self.show_previous = not self.show_previous
        return self.show_previous

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def debug_args(
        self,
        image: str = DEBUG_IMAGE_DEFAULT,
        shell: str = DEBUG_SHELL_DEFAULT,
    ) -> list[str]:
        args = ["debug", str(self.pod)]
        if self.namespace:
            args.extend(["-n", self.namespace])
        args.extend(
            [
                "-c",
                f"{self.selection}-debug",
                "--image",
                image,
                "--stdin",
                "--tty",
                "--",
                shell,
            ]
        )
        return args

    async def debug(self) -> ActionResult | None:
        """Launch an ephemeral debug container after confirmation."""
        if not self._require_container():
            return None
        args = self.debug_args()
        return await self._orch.new_workflow().run(
            args,
            prompt=f"Debug: {self.pod}-{self.selection}?\n{render_prompt('kubectl', args)}",
            interactive=True,
        )

    def exec_args(self, shell: str = DEBUG_SHELL_DEFAULT) -> list[str]:
        args = ["exec", "-it", str(self.pod)]
        if self.namespace:
            args.extend(["-n", self.namespace])
        args.extend(["-c", self.selection, "--", shell])
        return args

    def exec(self) -> int | None:
        """Open a shell in the selected container."""
        if not self._require_container():
            return None
        return self._orch.run_in_terminal(self.exec_args())


__all__ = [
    "ContainersView",
]
