"""Tests for the event dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from kubedeck.constants.enums import EventType
from kubedeck.controllers.events.dispatcher import (
    EventDispatcher,
    event_identity,
    match_resource,
)


def modified(name: str, namespace: str | None) -> dict[str, Any]:
    return {
        "type": "MODIFIED",
        "object": {"kind": "Pod", "metadata": {"name": name, "namespace": namespace}},
    }


class TestMatching:
    """Tests for event identity and predicates."""

    def test_event_identity(self) -> None:
        assert event_identity(modified("nginx-1", "default")) == ("nginx-1", "default")

    def test_event_identity_without_object(self) -> None:
        assert event_identity({"type": "MODIFIED"}) == (None, None)

    def test_match_resource_respects_is_open(self) -> None:
        """A closed surface never matches."""
        open_flag = [True]
        predicate = match_resource("nginx-1", "default", lambda: open_flag[0])
        assert predicate(modified("nginx-1", "default"))
        open_flag[0] = False
        assert not predicate(modified("nginx-1", "default"))


class TestEventDispatcher:
    """Tests for EventDispatcher."""

    @pytest.mark.asyncio
    async def test_matching_event_triggers_one_callback(self) -> None:
        """A matching MODIFIED event fires exactly one callback, never inline."""
        dispatcher = EventDispatcher()
        calls: list[Any] = []
        dispatcher.subscribe(
            EventType.MODIFIED, "surface-1", match_resource("nginx-1", "default"), calls.append
        )

        assert dispatcher.publish(EventType.MODIFIED, modified("nginx-1", "default")) == 1
        assert calls == []

        await asyncio.sleep(0)
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_other_namespace_triggers_nothing(self) -> None:
        """A non-matching namespace is skipped."""
        dispatcher = EventDispatcher()
        calls: list[Any] = []
        dispatcher.subscribe(
            EventType.MODIFIED, "surface-1", match_resource("nginx-1", "default"), calls.append
        )

        dispatcher.publish(EventType.MODIFIED, modified("nginx-1", "staging"))
        await asyncio.sleep(0)

        assert calls == []
        assert len(dispatcher.subscriptions(EventType.MODIFIED)) == 1

    @pytest.mark.asyncio
    async def test_resubscribe_replaces_callback(self) -> None:
        """The last registration for a (type, scope) key wins."""
        dispatcher = EventDispatcher()
        first: list[Any] = []
        second: list[Any] = []
        predicate = match_resource("nginx-1", "default")
        dispatcher.subscribe(EventType.MODIFIED, "surface-1", predicate, first.append)
        dispatcher.subscribe(EventType.MODIFIED, "surface-1", predicate, second.append)

        dispatcher.publish_event(modified("nginx-1", "default"))
        await asyncio.sleep(0)

        assert first == []
        assert len(second) == 1

    @pytest.mark.asyncio
    async def test_scopes_are_independent(self) -> None:
        """Different scopes each get their own delivery."""
        dispatcher = EventDispatcher()
        calls: list[str] = []
        for scope in ("surface-1", "surface-2"):
            dispatcher.subscribe(
                EventType.MODIFIED,
                scope,
                match_resource("nginx-1", "default"),
                lambda _event, scope=scope: calls.append(scope),
            )

        dispatcher.publish(EventType.MODIFIED, modified("nginx-1", "default"))
        await asyncio.sleep(0)

        assert sorted(calls) == ["surface-1", "surface-2"]

    @pytest.mark.asyncio
    async def test_other_event_types_ignored(self) -> None:
        """Only subscriptions for the published type are considered."""
        dispatcher = EventDispatcher()
        calls: list[Any] = []
        dispatcher.subscribe(EventType.DELETED, "s", lambda _e: True, calls.append)

        assert dispatcher.publish(EventType.MODIFIED, modified("a", "b")) == 0

    @pytest.mark.asyncio
    async def test_publish_from_thread(self) -> None:
        """Events published off the loop are delivered on the loop."""
        loop = asyncio.get_running_loop()
        dispatcher = EventDispatcher(loop)
        delivered = loop.create_future()
        dispatcher.subscribe(
            EventType.MODIFIED,
            "surface-1",
            match_resource("nginx-1", "default"),
            lambda event: delivered.set_result(event),
        )

        await loop.run_in_executor(
            None, dispatcher.publish, EventType.MODIFIED, modified("nginx-1", "default")
        )

        event = await asyncio.wait_for(delivered, timeout=1)
        assert event_identity(event) == ("nginx-1", "default")

    @pytest.mark.asyncio
    async def test_callback_errors_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failing callback does not break the loop."""
        dispatcher = EventDispatcher()

        def broken(_event: Any) -> None:
            raise RuntimeError("boom")

        dispatcher.subscribe(EventType.MODIFIED, "s", lambda _e: True, broken)
        with caplog.at_level(logging.ERROR):
            dispatcher.publish(EventType.MODIFIED, modified("a", "b"))
            await asyncio.sleep(0)

        assert "Event callback failed" in caplog.text

    def test_publish_without_loop_drops(self) -> None:
        """Without a bound loop nothing is scheduled."""
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.MODIFIED, "s", lambda _e: True, lambda _e: None)
        assert dispatcher.publish(EventType.MODIFIED, modified("a", "b")) == 0

    def test_clear(self) -> None:
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.MODIFIED, "s", lambda _e: True, lambda _e: None)
        dispatcher.clear()
        assert dispatcher.subscriptions(EventType.MODIFIED) == []
