"""Keyboard bindings module.

Bindings are organized into three categories:

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen-specific bindings (*_SCREEN_BINDINGS)
- tables: DataTable bindings (DATA_TABLE_BINDINGS)
"""

from kubedeck.keyboard.app import APP_BINDINGS
from kubedeck.keyboard.navigation import DETAIL_SCREEN_BINDINGS, RESOURCE_SCREEN_BINDINGS
from kubedeck.keyboard.tables import DATA_TABLE_BINDINGS

__all__ = [
    "APP_BINDINGS",
    "DATA_TABLE_BINDINGS",
    "DETAIL_SCREEN_BINDINGS",
    "RESOURCE_SCREEN_BINDINGS",
]
