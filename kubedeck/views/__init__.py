"""Views: per-kind behaviors, their registry and the orchestrator driving them."""

from kubedeck.views.base import FallbackView, ResourceView
from kubedeck.views.containers import ContainersView
from kubedeck.views.host import DisplaySurface, Host
from kubedeck.views.orchestrator import ViewOrchestrator
from kubedeck.views.registry import ViewRegistry, default_registry

__all__ = [
    "ContainersView",
    "DisplaySurface",
    "FallbackView",
    "Host",
    "ResourceView",
    "ViewOrchestrator",
    "ViewRegistry",
    "default_registry",
]
