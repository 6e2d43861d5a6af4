"""Default view behavior, also used as the fallback for unregistered kinds."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, ClassVar

from kubedeck.constants.defaults import NAMESPACE_ALL
from kubedeck.constants.enums import Syntax
from kubedeck.constants.values import (
    COLUMN_AGE,
    COLUMN_NAME,
    COLUMN_NAMESPACE,
    COLUMN_STATUS,
)
from kubedeck.models.definitions import ViewDefinition
from kubedeck.models.snapshot import ListingRow, ResourceSnapshot

if TYPE_CHECKING:
    from kubedeck.views.orchestrator import ViewOrchestrator

logger = logging.getLogger(__name__)


def format_age(timestamp: Any, now: datetime | None = None) -> str:
    """Render a creation timestamp as ``45s``/``12m``/``3h``/``2d``."""
    if not isinstance(timestamp, str) or not timestamp:
        return ""
    try:
        created = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return ""
    seconds = int(((now or datetime.now(timezone.utc)) - created).total_seconds())
    if seconds < 60:
        return f"{max(seconds, 0)}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def item_status(item: dict[str, Any]) -> str:
    status = item.get("status")
    if not isinstance(status, dict):
        return ""
    if status.get("phase"):
        return str(status["phase"])
    if "replicas" in status:
        return f"{status.get('readyReplicas', 0)}/{status.get('replicas', 0)}"
    return ""


class ResourceView:
    """Behavior set for one view: View, Draw, Desc, get_current_selection."""

    HEADERS: ClassVar[tuple[str, ...]] = (COLUMN_NAME, COLUMN_NAMESPACE, COLUMN_STATUS, COLUMN_AGE)

    def __init__(self, orchestrator: ViewOrchestrator, definition: ViewDefinition) -> None:
        self._orch = orchestrator
        self.definition = definition
        self.snapshot: ResourceSnapshot | None = None

    @property
    def name(self) -> str:
        return self.definition.resource

    @property
    def resource(self) -> str:
        """Kind passed to kubectl for actions on this view's rows."""
        return self.definition.resource

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def rows(self, snapshot: ResourceSnapshot) -> list[ListingRow]:
        rows = []
        for item in snapshot.items():
            metadata = item.get("metadata") or {}
            name = str(metadata.get("name", ""))
            namespace = metadata.get("namespace")
            rows.append(
                ListingRow(
                    name=name,
                    namespace=namespace,
                    cells=(
                        name,
                        namespace or "",
                        item_status(item),
                        format_age(metadata.get("creationTimestamp")),
                    ),
                )
            )
        return rows

    async def view(self) -> ResourceSnapshot | None:
        """Fetch the listing and draw it on the main surface."""
        session = self._orch.session
        namespace = None if session.namespace == NAMESPACE_ALL else session.namespace
        snapshot = await self._orch.builder.fetch(
            self.definition,
            namespace=namespace,
            all_namespaces=namespace is None,
            label_selector=session.filter_spec(self.name).label_selector,
        )
        if snapshot is None:
            self._orch.report_missing(self.definition.title)
            return None
        self.snapshot = snapshot
        self.draw()
        return snapshot

    def draw(self) -> None:
        """Re-render the last snapshot with current sort, filter and selection."""
        if self.snapshot is None:
            return
        rows = self._orch.session.apply(self.name, self.HEADERS, self.rows(self.snapshot))
        self._orch.host.main_surface.show_listing(self.snapshot, self.HEADERS, rows)

    # ------------------------------------------------------------------
    # Detail
    # ------------------------------------------------------------------

    def desc_definition(self, name: str, namespace: str | None) -> ViewDefinition:
        args = ["describe", self.resource, name]
        if namespace:
            args.extend(["-n", namespace])
        return ViewDefinition(
            resource=f"{self.name}_desc_{name}_{namespace}",
            url=tuple(args),
            syntax=Syntax.TEXT,
            display_name=f"{self.resource} - {name}",
            ft="k8s_desc",
        )

    async def desc(
        self,
        name: str,
        namespace: str | None,
        reload: bool = False,
    ) -> ResourceSnapshot | None:
        """Fetch ``kubectl describe`` output into a floating surface."""
        definition = self.desc_definition(name, namespace)
        snapshot = await self._orch.builder.view_float(definition, reload=reload)
        if snapshot is None:
            self._orch.report_missing(definition.title)
            return None
        self._orch.show_float(definition.resource, definition.title, snapshot)
        return snapshot

    def get_current_selection(self) -> tuple[str, str | None] | None:
        row = self._orch.host.main_surface.focused_row()
        if row is None or not row.name:
            return None
        return row.name, row.namespace


class FallbackView(ResourceView):
    """Generic behavior for kinds without a dedicated one."""


__all__ = [
    "FallbackView",
    "ResourceView",
    "format_age",
    "item_status",
]
