"""All enum definitions for kubedeck.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# View State Enums
# =============================================================================

class SortOrder(str, Enum):
    """Sort direction for a listing column."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        """Return the opposite direction."""
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


# =============================================================================
# Fetch Enums
# =============================================================================

class FetchMode(Enum):
    """How a view definition reaches the cluster."""

    CLI = "cli"
    HTTP = "http"


class Syntax(str, Enum):
    """Declared output format of a fetch."""

    JSON = "json"
    YAML = "yaml"
    TEXT = "text"
    LOGS = "less"

    @classmethod
    def from_value(cls, value: str | None) -> "Syntax":
        """Resolve a syntax tag, treating unknown tags as plain text."""
        for member in cls:
            if member.value == value:
                return member
        return cls.TEXT


# =============================================================================
# Event Enums
# =============================================================================

class EventType(str, Enum):
    """Kubernetes watch event types."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


# =============================================================================
# Action Workflow Enums
# =============================================================================

class ActionState(Enum):
    """States of a confirm-then-execute action."""

    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


class NotifySeverity(str, Enum):
    """Notification severities understood by Textual's ``App.notify``."""

    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


__all__ = [
    "ActionState",
    "EventType",
    "FetchMode",
    "NotifySeverity",
    "SortOrder",
    "Syntax",
]
