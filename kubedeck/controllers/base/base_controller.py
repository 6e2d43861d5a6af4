"""Shared controller plumbing: the notification sink.

Controllers never talk to the UI directly. They report through a
:class:`Notifier`, which the Textual ``App`` satisfies natively through
``App.notify``; headless callers get :class:`LoggingNotifier`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from kubedeck.constants.enums import NotifySeverity

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Anything that can surface a user-visible notification."""

    def notify(
        self,
        message: str,
        *,
        title: str = "",
        severity: Any = "information",
    ) -> None: ...


class LoggingNotifier:
    """Notifier that writes notifications to the log."""

    _LEVELS = {
        NotifySeverity.INFORMATION.value: logging.INFO,
        NotifySeverity.WARNING.value: logging.WARNING,
        NotifySeverity.ERROR.value: logging.ERROR,
    }

    def notify(
        self,
        message: str,
        *,
        title: str = "",
        severity: Any = "information",
    ) -> None:
        level = self._LEVELS.get(str(getattr(severity, "value", severity)), logging.INFO)
        logger.log(level, "%s%s", f"{title}: " if title else "", message)


def notify(
    notifier: Notifier,
    message: str,
    severity: NotifySeverity = NotifySeverity.INFORMATION,
    title: str = "",
) -> None:
    """Send ``message`` through ``notifier`` using Textual's severity strings."""
    notifier.notify(message, title=title, severity=severity.value)


__all__ = [
    "LoggingNotifier",
    "Notifier",
    "notify",
]
