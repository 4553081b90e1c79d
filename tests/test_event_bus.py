"""EventBus and DataStore: ordering, isolation, copy semantics."""

from __future__ import annotations

import logging

import pytest

from standarium_erp.data_store import COLLECTIONS, DataStore, change_event
from standarium_erp.event_bus import EventBus


class TestEventBus:
    def test_handlers_run_in_registration_order(self) -> None:
        bus = EventBus()
        calls = []
        bus.on("x", lambda p: calls.append(("a", p)))
        bus.on("x", lambda p: calls.append(("b", p)))
        assert bus.emit("x", 1) == 0
        assert calls == [("a", 1), ("b", 1)]

    def test_failing_handler_does_not_stop_the_rest(self, caplog) -> None:
        bus = EventBus()
        calls = []

        def boom(payload):
            raise RuntimeError("boom")

        bus.on("x", boom)
        bus.on("x", calls.append)
        with caplog.at_level(logging.ERROR, logger="standarium.events"):
            failures = bus.emit("x", "payload")
        assert failures == 1
        assert calls == ["payload"]
        assert "boom" in caplog.text

    def test_off_removes_only_that_handler(self) -> None:
        bus = EventBus()
        calls = []

        def first(p):
            calls.append("first")

        def second(p):
            calls.append("second")

        bus.on("x", first)
        bus.on("x", second)
        bus.off("x", first)
        bus.off("x", lambda p: None)
        bus.off("unknown", first)
        bus.emit("x")
        assert calls == ["second"]
        assert bus.handler_count("x") == 1

    def test_emit_without_handlers(self) -> None:
        assert EventBus().emit("nobody-listens") == 0

    def test_handler_may_unsubscribe_during_emit(self) -> None:
        bus = EventBus()
        calls = []

        def once(p):
            calls.append("once")
            bus.off("x", once)

        bus.on("x", once)
        bus.on("x", lambda p: calls.append("always"))
        bus.emit("x")
        bus.emit("x")
        assert calls == ["once", "always", "always"]


class TestDataStore:
    def test_get_returns_a_copy(self) -> None:
        store = DataStore(EventBus())
        store.set_products(["a", "b"])
        got = store.get_products()
        got.append("c")
        assert store.get_products() == ["a", "b"]

    def test_set_copies_the_input(self) -> None:
        store = DataStore(EventBus())
        items = ["a"]
        store.set_services(items)
        items.append("b")
        assert store.get_services() == ["a"]

    def test_set_emits_change_event(self) -> None:
        bus = EventBus()
        store = DataStore(bus)
        seen = []
        bus.on(change_event("components"), seen.append)
        store.set_components([1])
        assert seen == ["components"]

    def test_clear_empties_every_collection(self) -> None:
        bus = EventBus()
        store = DataStore(bus)
        seen = []
        for name in COLLECTIONS:
            bus.on(change_event(name), seen.append)
        store.set_sales([1, 2])
        seen.clear()
        store.clear()
        assert store.counts() == {name: 0 for name in COLLECTIONS}
        assert sorted(seen) == sorted(COLLECTIONS)

    def test_unknown_collection(self) -> None:
        store = DataStore(EventBus())
        with pytest.raises(ValueError):
            store.set("customers", [])
        with pytest.raises(ValueError):
            store.get("customers")
