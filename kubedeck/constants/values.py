"""Scalar constants for kubedeck.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "kubedeck"

# ============================================================================
# Templates
# ============================================================================

BASE_PLACEHOLDER: Final = "{{BASE}}"
SELECTION_MARK: Final = "[x]"

# ============================================================================
# Listing columns
# ============================================================================

COLUMN_NAME: Final = "NAME"
COLUMN_NAMESPACE: Final = "NAMESPACE"
COLUMN_STATUS: Final = "STATUS"
COLUMN_AGE: Final = "AGE"

__all__ = [
    "APP_TITLE",
    "BASE_PLACEHOLDER",
    "COLUMN_AGE",
    "COLUMN_NAME",
    "COLUMN_NAMESPACE",
    "COLUMN_STATUS",
    "SELECTION_MARK",
]
