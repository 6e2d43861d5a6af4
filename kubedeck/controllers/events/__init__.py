"""Routing of cluster change events to open views."""

from kubedeck.controllers.events.dispatcher import (
    EventDispatcher,
    Subscription,
    event_identity,
    match_resource,
)

__all__ = [
    "EventDispatcher",
    "Subscription",
    "event_identity",
    "match_resource",
]
