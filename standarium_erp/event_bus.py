"""Minimal publish/subscribe registry keyed by event name."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger("standarium.events")

Handler = Callable[[Any], None]


class EventBus:
    """Synchronous pub/sub.

    Handlers run in registration order. A handler that raises is logged and
    skipped; the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def on(self, name: str, handler: Handler) -> None:
        self._handlers.setdefault(name, []).append(handler)

    def off(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name)
        if not handlers:
            return
        self._handlers[name] = [h for h in handlers if h is not handler]

    def emit(self, name: str, payload: Any = None) -> int:
        """Invoke every handler for ``name``. Returns how many of them failed."""
        failures = 0
        # Iterate a copy so handlers may (un)subscribe while we dispatch
        for handler in list(self._handlers.get(name, ())):
            try:
                handler(payload)
            except Exception:
                failures += 1
                logger.exception("Handler %r failed for event %s", handler, name)
        return failures

    def handler_count(self, name: str) -> int:
        return len(self._handlers.get(name, ()))

    def clear(self) -> None:
        self._handlers.clear()
