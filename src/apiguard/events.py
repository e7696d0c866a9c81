"""Process-wide event bus used to broadcast session-level signals.

The request clients emit :data:`UNAUTHORIZED_EVENT` when the server
rejects the credential, so that interested listeners (a navigation layer,
a CLI prompt, a background refresher) can react without the client
importing any of them.

Listeners run synchronously in subscription order.  A listener that raises
is logged and skipped; the remaining listeners still run.

Like :mod:`apiguard.output`, a lazily-created global instance is
available via :func:`get_event_bus`, but every client also accepts an
explicit :class:`EventBus` so tests can use an isolated one.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

UNAUTHORIZED_EVENT = "auth:unauthorized"
"""Emitted after a 401 response has cleared the stored credential."""

Listener = Callable[[Any], None]


class EventBus:
    """Minimal named-event dispatcher."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def subscribe(self, name: str, listener: Listener) -> Callable[[], None]:
        """Register *listener* for events called *name*.

        Returns:
            A callable that removes the subscription.  Calling it more than
            once is harmless.
        """
        self._listeners.setdefault(name, []).append(listener)

        def _unsubscribe() -> None:
            listeners = self._listeners.get(name, [])
            if listener in listeners:
                listeners.remove(listener)

        return _unsubscribe

    def emit(self, name: str, payload: Any = None) -> int:
        """Deliver *payload* to every listener of *name*.

        Returns:
            The number of listeners that were invoked.
        """
        listeners = list(self._listeners.get(name, ()))
        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener for event %r failed", name)
        return len(listeners)

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, ()))


# ------------------------------------------------------------------ #
# Global event bus
# ------------------------------------------------------------------ #

_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Return the global :class:`EventBus`, creating it on first use."""
    global _bus
    if _bus is None:
        _bus = EventBus()
    return _bus


def set_event_bus(bus: EventBus) -> None:
    """Install *bus* as the global :class:`EventBus`."""
    global _bus
    _bus = bus


def reset_event_bus() -> None:
    """Drop the global :class:`EventBus`.  Primarily useful in test suites."""
    global _bus
    _bus = None
