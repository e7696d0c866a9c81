"""Tests for the event bus."""

from __future__ import annotations

import logging

import pytest

from apiguard.events import (
    UNAUTHORIZED_EVENT,
    EventBus,
    get_event_bus,
    reset_event_bus,
    set_event_bus,
)


class TestEventBus:
    def test_emit_delivers_payload(self, bus: EventBus) -> None:
        received: list[object] = []
        bus.subscribe(UNAUTHORIZED_EVENT, received.append)

        count = bus.emit(UNAUTHORIZED_EVENT, {"status": 401})

        assert count == 1
        assert received == [{"status": 401}]

    def test_emit_without_listeners(self, bus: EventBus) -> None:
        assert bus.emit("nothing:here") == 0

    def test_listeners_called_in_order(self, bus: EventBus) -> None:
        calls: list[str] = []
        bus.subscribe("evt", lambda _: calls.append("first"))
        bus.subscribe("evt", lambda _: calls.append("second"))

        bus.emit("evt")
        assert calls == ["first", "second"]

    def test_unsubscribe(self, bus: EventBus) -> None:
        calls: list[object] = []
        unsubscribe = bus.subscribe("evt", calls.append)
        unsubscribe()
        unsubscribe()  # second call is harmless

        bus.emit("evt", 1)
        assert calls == []
        assert bus.listener_count("evt") == 0

    def test_failing_listener_does_not_block_others(
        self, bus: EventBus, caplog: pytest.LogCaptureFixture
    ) -> None:
        calls: list[object] = []

        def broken(_: object) -> None:
            raise RuntimeError("boom")

        bus.subscribe("evt", broken)
        bus.subscribe("evt", calls.append)

        with caplog.at_level(logging.ERROR, logger="apiguard.events"):
            bus.emit("evt", "payload")

        assert calls == ["payload"]
        assert "Listener for event 'evt' failed" in caplog.text


class TestGlobalBus:
    def test_get_is_lazy_singleton(self) -> None:
        assert get_event_bus() is get_event_bus()

    def test_set_and_reset(self) -> None:
        custom = EventBus()
        set_event_bus(custom)
        assert get_event_bus() is custom

        reset_event_bus()
        assert get_event_bus() is not custom
