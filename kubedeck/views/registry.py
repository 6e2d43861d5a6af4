"""Registry mapping view names to behaviors and definitions.

Populated once at startup. Any name without a registered behavior resolves to
the fallback behavior, and any name without a definition gets a generic one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from kubedeck.models.definitions import ViewDefinition
from kubedeck.views.base import FallbackView, ResourceView
from kubedeck.views.containers import ContainersView
from kubedeck.views.definitions import DEFAULT_DEFINITIONS, generic_definition

if TYPE_CHECKING:
    from kubedeck.views.orchestrator import ViewOrchestrator

logger = logging.getLogger(__name__)

ViewFactory = Callable[["ViewOrchestrator", ViewDefinition], ResourceView]


def normalize_view_name(name: str) -> str:
    return name.strip().lower()


class ViewRegistry:
    """Explicit name -> behavior/definition mapping with one fallback."""

    def __init__(self, fallback: ViewFactory = FallbackView) -> None:
        self._fallback = fallback
        self._factories: dict[str, ViewFactory] = {}
        self._definitions: dict[str, ViewDefinition] = {}

    def register(self, name: str, factory: ViewFactory) -> None:
        self._factories[normalize_view_name(name)] = factory

    def register_definition(self, definition: ViewDefinition) -> None:
        self._definitions[normalize_view_name(definition.resource)] = definition

    def register_definitions(self, definitions: Iterable[ViewDefinition]) -> None:
        for definition in definitions:
            self.register_definition(definition)

    def has_behavior(self, name: str) -> bool:
        return normalize_view_name(name) in self._factories

    def factory(self, name: str) -> ViewFactory:
        factory = self._factories.get(normalize_view_name(name))
        if factory is None:
            logger.debug("No behavior registered for %s, using fallback", name)
            return self._fallback
        return factory

    def definition(self, name: str) -> ViewDefinition:
        key = normalize_view_name(name)
        return self._definitions.get(key) or generic_definition(key)

    def names(self) -> list[str]:
        return sorted(set(self._definitions) | set(self._factories))


def default_registry() -> ViewRegistry:
    """Registry with the built-in behaviors and definitions."""
    registry = ViewRegistry()
    registry.register_definitions(DEFAULT_DEFINITIONS)
    registry.register("containers", ContainersView)
    return registry


__all__ = [
    "ViewFactory",
    "ViewRegistry",
    "default_registry",
    "normalize_view_name",
]
