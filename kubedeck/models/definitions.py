"""View definitions and per-invocation fetch specifications."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from kubedeck.constants.enums import FetchMode, Syntax
from kubedeck.constants.values import BASE_PLACEHOLDER


@dataclass(frozen=True)
class Hint:
    """A contextual help entry shown for a view."""

    key: str
    desc: str


@dataclass(frozen=True)
class ViewDefinition:
    """Static configuration describing how to fetch and format a view.

    ``url`` is either a CLI argument vector (``("get", "pods", "-o", "json")``)
    or a single URL template containing ``{{BASE}}``. Definitions are never
    mutated; per-call variations are derived with :meth:`with_overrides`.
    """

    resource: str
    url: tuple[str, ...]
    syntax: Syntax = Syntax.JSON
    display_name: str = ""
    ft: str = ""
    cmd: str = "kubectl"
    hints: tuple[Hint, ...] = ()

    @property
    def fetch_mode(self) -> FetchMode:
        """Return HTTP when the template targets the API base, CLI otherwise."""
        if len(self.url) == 1 and self.url[0].startswith(BASE_PLACEHOLDER):
            return FetchMode.HTTP
        return FetchMode.CLI

    @property
    def title(self) -> str:
        return self.display_name or self.resource

    def with_overrides(self, **changes: Any) -> ViewDefinition:
        """Return a copy with ``changes`` applied."""
        if "url" in changes:
            changes["url"] = tuple(changes["url"])
        if "hints" in changes:
            changes["hints"] = tuple(changes["hints"])
        return replace(self, **changes)


@dataclass(frozen=True)
class FetchSpec:
    """Resolved command or URL for one fetch attempt."""

    mode: FetchMode
    syntax: Syntax
    command: str = ""
    args: tuple[str, ...] = ()
    url: str = ""
    env: dict[str, str] = field(default_factory=dict)

    def describe(self) -> str:
        """Human readable rendering used in notifications and logs."""
        if self.mode is FetchMode.HTTP:
            return f"GET {self.url}"
        return " ".join((self.command, *self.args))


__all__ = [
    "FetchSpec",
    "Hint",
    "ViewDefinition",
]
