"""Controllers module for kubedeck.

This module provides the process executor, fetch engine, event dispatcher
and action workflows the views are built on.
"""

from __future__ import annotations

# Base classes
from kubedeck.controllers.base import LoggingNotifier, Notifier

# Actions
from kubedeck.controllers.actions import ActionWorkflow, EditWorkflow

# Events
from kubedeck.controllers.events import EventDispatcher

# Fetch
from kubedeck.controllers.fetch import ClusterApiClient, ResourceBuilder

# Processes
from kubedeck.controllers.process import ProcessExecutor

__all__ = [
    "ActionWorkflow",
    "ClusterApiClient",
    "EditWorkflow",
    "EventDispatcher",
    "LoggingNotifier",
    "Notifier",
    "ProcessExecutor",
    "ResourceBuilder",
]
