"""Data display widgets."""

from kubedeck.widgets.data.resource_table import ResourceTable

__all__ = [
    "ResourceTable",
]
