"""Base classes shared by controllers."""

from kubedeck.controllers.base.base_controller import (
    LoggingNotifier,
    Notifier,
    notify,
)

__all__ = [
    "LoggingNotifier",
    "Notifier",
    "notify",
]
