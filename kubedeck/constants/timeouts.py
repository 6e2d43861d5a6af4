"""Timeout constants for kubedeck.

All timeout and interval values for API requests and async operations.
"""

from typing import Final

# ============================================================================
# API timeouts (float, in seconds)
# ============================================================================

API_REQUEST_TIMEOUT: Final = 30.0
PROXY_START_TIMEOUT: Final = 10.0

# ============================================================================
# Workflow timings (float, in seconds)
# ============================================================================

# Grace period before the edit check so a ``:wq`` style save lands first.
EDIT_CHECK_DELAY: Final = 0.1

__all__ = [
    "API_REQUEST_TIMEOUT",
    "EDIT_CHECK_DELAY",
    "PROXY_START_TIMEOUT",
]
