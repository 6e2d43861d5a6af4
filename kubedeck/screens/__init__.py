"""kubedeck TUI screens.

    - resource_screen - main listing surface
    - detail_screen   - floating detail surfaces (describe, yaml, logs, containers)
"""

from kubedeck.screens.detail_screen import DetailScreen
from kubedeck.screens.resource_screen import ResourceScreen

__all__ = [
    "DetailScreen",
    "ResourceScreen",
]
