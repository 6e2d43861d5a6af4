"""Event dispatcher - routes cluster change events to the views that care.

Subscriptions are keyed by ``(event_type, scope)``; the scope is normally the
id of the display surface that opened a detail view. Registering the same key
again replaces the earlier callback. There is no unsubscribe: once the owning
surface closes, its predicate stops matching and the subscription goes quiet.

Delivery never happens inline. :meth:`EventDispatcher.publish` schedules each
delivery on the event loop, where the predicate is checked and the callback
runs, so callbacks never overlap and may touch session state freely.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from kubedeck.constants.enums import EventType

logger = logging.getLogger(__name__)

Event = Mapping[str, Any]
Predicate = Callable[[Event], bool]
EventCallback = Callable[[Event], None]


def event_identity(event: Event) -> tuple[str | None, str | None]:
    """Return ``(name, namespace)`` of a watch event's object."""
    obj = event.get("object")
    metadata = obj.get("metadata") if isinstance(obj, Mapping) else None
    if not isinstance(metadata, Mapping):
        return None, None
    return metadata.get("name"), metadata.get("namespace")


def match_resource(
    name: str,
    namespace: str | None,
    is_open: Callable[[], bool] | None = None,
) -> Predicate:
    """Predicate matching events for one resource while ``is_open`` holds."""

    def predicate(event: Event) -> bool:
        if is_open is not None and not is_open():
            return False
        return event_identity(event) == (name, namespace)

    return predicate


@dataclass(frozen=True)
class Subscription:
    event_type: str
    scope: str
    predicate: Predicate
    callback: EventCallback


class EventDispatcher:
    """Publish/subscribe router bound to one event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._subscriptions: dict[tuple[str, str], Subscription] = {}

    @staticmethod
    def _key(event_type: EventType | str) -> str:
        return event_type.value if isinstance(event_type, EventType) else str(event_type)

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def subscribe(
        self,
        event_type: EventType | str,
        scope: str,
        predicate: Predicate,
        callback: EventCallback,
    ) -> None:
        """Register ``callback``; replaces any earlier one for the same key."""
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                pass
        key = (self._key(event_type), scope)
        if key in self._subscriptions:
            logger.debug("Replacing subscription %s", key)
        self._subscriptions[key] = Subscription(key[0], scope, predicate, callback)

    def subscriptions(self, event_type: EventType | str) -> list[Subscription]:
        wanted = self._key(event_type)
        return [sub for (kind, _), sub in self._subscriptions.items() if kind == wanted]

    def publish(self, event_type: EventType | str, event: Event) -> int:
        """Schedule delivery of ``event`` to every subscription of ``event_type``.

        Safe to call from any thread.

        Returns:
            Number of deliveries scheduled (before predicates are checked).
        """
        subscriptions = self.subscriptions(event_type)
        if not subscriptions:
            return 0
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning("Dropping %s event: no event loop bound", self._key(event_type))
            return 0

        try:
            on_loop = asyncio.get_running_loop() is loop
        except RuntimeError:
            on_loop = False
        schedule = loop.call_soon if on_loop else loop.call_soon_threadsafe
        for subscription in subscriptions:
            schedule(self._deliver, subscription, event)
        return len(subscriptions)

    def publish_event(self, event: Event) -> int:
        """Publish a raw watch event using its own ``type`` field."""
        event_type = event.get("type")
        if not event_type:
            return 0
        return self.publish(str(event_type), event)

    @staticmethod
    def _deliver(subscription: Subscription, event: Event) -> None:
        if not subscription.predicate(event):
            return
        try:
            subscription.callback(event)
        except Exception:
            logger.exception(
                "Event callback failed for %s/%s", subscription.event_type, subscription.scope
            )

    def clear(self) -> None:
        """Drop every subscription (session teardown)."""
        self._subscriptions.clear()


__all__ = [
    "EventDispatcher",
    "Subscription",
    "event_identity",
    "match_resource",
]
