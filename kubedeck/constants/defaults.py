"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Command defaults
# ============================================================================

KUBECTL_CMD_DEFAULT: Final = "kubectl"
NAMESPACE_ALL: Final = "All"
API_BASE_DEFAULT: Final = "http://127.0.0.1:8001"

# ============================================================================
# View defaults
# ============================================================================

LOG_SINCE_DEFAULT: Final = "5m"
FILTER_HISTORY_MAX_DEFAULT: Final = 10
DEBUG_IMAGE_DEFAULT: Final = "busybox"
DEBUG_SHELL_DEFAULT: Final = "/bin/sh"
EDITOR_FALLBACK: Final = "vi"

# ============================================================================
# Preferences
# ============================================================================

CONFIG_DIR_NAME: Final = "kubedeck"
CONFIG_FILE_NAME: Final = "kubedeck.json"

__all__ = [
    "API_BASE_DEFAULT",
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "DEBUG_IMAGE_DEFAULT",
    "DEBUG_SHELL_DEFAULT",
    "EDITOR_FALLBACK",
    "FILTER_HISTORY_MAX_DEFAULT",
    "KUBECTL_CMD_DEFAULT",
    "LOG_SINCE_DEFAULT",
    "NAMESPACE_ALL",
]
