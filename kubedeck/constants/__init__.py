"""Constants module for kubedeck.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings with Final)
- timeouts.py: Timeout values (seconds)
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in kubedeck.keyboard module.
"""

from kubedeck.constants.defaults import (
    API_BASE_DEFAULT,
    KUBECTL_CMD_DEFAULT,
    LOG_SINCE_DEFAULT,
    NAMESPACE_ALL,
)
from kubedeck.constants.enums import (
    ActionState,
    EventType,
    FetchMode,
    NotifySeverity,
    SortOrder,
    Syntax,
)
from kubedeck.constants.timeouts import API_REQUEST_TIMEOUT
from kubedeck.constants.values import APP_TITLE, BASE_PLACEHOLDER

__all__ = [
    "API_BASE_DEFAULT",
    "API_REQUEST_TIMEOUT",
    # Application
    "APP_TITLE",
    "BASE_PLACEHOLDER",
    "KUBECTL_CMD_DEFAULT",
    "LOG_SINCE_DEFAULT",
    "NAMESPACE_ALL",
    # Enums
    "ActionState",
    "EventType",
    "FetchMode",
    "NotifySeverity",
    "SortOrder",
    "Syntax",
]
