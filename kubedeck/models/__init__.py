"""Data models for kubedeck."""

from kubedeck.models.definitions import FetchSpec, Hint, ViewDefinition
from kubedeck.models.snapshot import ListingRow, ResourceSnapshot

__all__ = [
    "FetchSpec",
    "Hint",
    "ListingRow",
    "ResourceSnapshot",
    "ViewDefinition",
]
