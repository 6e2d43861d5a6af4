"""Built-in view definitions.

Definitions are configuration: the orchestrator only reads them. Kinds not
listed here get a generic ``kubectl get <kind> -o json`` definition.
"""

from __future__ import annotations

from typing import Final

from kubedeck.constants.enums import Syntax
from kubedeck.models.definitions import Hint, ViewDefinition

_COMMON_HINTS: Final = (
    Hint("d", "Describe"),
    Hint("y", "Yaml"),
    Hint("e", "Edit"),
    Hint("D", "Delete"),
    Hint("s", "Sort"),
    Hint("space", "Select"),
    Hint("/", "Filter"),
)


def generic_definition(resource: str) -> ViewDefinition:
    """Definition used for a kind without a registered one."""
    return ViewDefinition(
        resource=resource,
        url=("get", resource, "-o", "json"),
        syntax=Syntax.JSON,
        display_name=resource.capitalize(),
        hints=_COMMON_HINTS,
    )


PODS: Final = ViewDefinition(
    resource="pods",
    url=("get", "pods", "-o", "json"),
    syntax=Syntax.JSON,
    display_name="Pods",
    hints=(*_COMMON_HINTS, Hint("enter", "Containers")),
)

CONTAINERS: Final = ViewDefinition(
    resource="containers",
    url=("{{BASE}}/api/v1/namespaces/{{NAMESPACE}}/pods/{{NAME}}",),
    syntax=Syntax.JSON,
    display_name="Containers",
    ft="k8s_containers",
    hints=(
        Hint("l", "Logs"),
        Hint("x", "Exec"),
        Hint("b", "Debug"),
    ),
)

DEFAULT_DEFINITIONS: Final = (
    PODS,
    CONTAINERS,
    generic_definition("deployments"),
    generic_definition("services"),
    generic_definition("nodes"),
    generic_definition("namespaces"),
    generic_definition("configmaps"),
)

__all__ = [
    "CONTAINERS",
    "DEFAULT_DEFINITIONS",
    "PODS",
    "generic_definition",
]
