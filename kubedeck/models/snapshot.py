"""Resource snapshots and the rows derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from kubedeck.constants.enums import Syntax


@dataclass(frozen=True)
class ResourceSnapshot:
    """Decoded result of one fetch operation.

    A refresh produces a new snapshot; existing snapshots are never mutated.
    ``floating`` marks snapshots meant for a transient detail surface and
    ``reload`` marks a refresh of a surface that is already open.
    """

    resource: str
    display_name: str
    syntax: Syntax
    raw: str
    data: Any
    namespace: str | None = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    floating: bool = False
    reload: bool = False

    @property
    def text(self) -> str:
        """Text suitable for a detail surface."""
        return self.raw

    def items(self) -> list[dict[str, Any]]:
        """Return list items for ``List`` payloads, or the object itself."""
        if isinstance(self.data, dict):
            items = self.data.get("items")
            if isinstance(items, list):
                return [item for item in items if isinstance(item, dict)]
            return [self.data]
        if isinstance(self.data, list):
            return [item for item in self.data if isinstance(item, dict)]
        return []


@dataclass(frozen=True)
class ListingRow:
    """One rendered row of a listing surface."""

    name: str
    namespace: str | None
    cells: tuple[str, ...]
    selected: bool = False


__all__ = [
    "ListingRow",
    "ResourceSnapshot",
]
