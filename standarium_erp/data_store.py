"""
data_store.py: authoritative in-memory cache of the four entity collections.

Only the sync gateway writes here, always replacing a whole collection with
the latest snapshot. Every setter emits "<collection>Changed" on the bus.
"""

from __future__ import annotations

from typing import Any

from standarium_erp.event_bus import EventBus

COLLECTIONS = ("products", "services", "components", "sales")


def change_event(collection: str) -> str:
    return f"{collection}Changed"


class DataStore:
    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self._collections: dict[str, list[Any]] = {name: [] for name in COLLECTIONS}

    # ── Generic access (used by the gateway) ───────────────────────────────
    def set(self, collection: str, items) -> None:
        if collection not in self._collections:
            raise ValueError(f"Unknown collection: {collection}")
        # Swap the reference in one assignment; readers never see a half-built list
        self._collections[collection] = list(items)
        self.bus.emit(change_event(collection), collection)

    def get(self, collection: str) -> list[Any]:
        if collection not in self._collections:
            raise ValueError(f"Unknown collection: {collection}")
        return list(self._collections[collection])

    def counts(self) -> dict[str, int]:
        return {name: len(items) for name, items in self._collections.items()}

    def clear(self) -> None:
        for name in COLLECTIONS:
            self.set(name, [])

    # ── Named setters / getters ────────────────────────────────────────────
    def set_products(self, items) -> None:
        self.set("products", items)

    def get_products(self) -> list[Any]:
        return self.get("products")

    def set_services(self, items) -> None:
        self.set("services", items)

    def get_services(self) -> list[Any]:
        return self.get("services")

    def set_components(self, items) -> None:
        self.set("components", items)

    def get_components(self) -> list[Any]:
        return self.get("components")

    def set_sales(self, items) -> None:
        self.set("sales", items)

    def get_sales(self) -> list[Any]:
        return self.get("sales")
