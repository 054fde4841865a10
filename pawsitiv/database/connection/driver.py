# ==============================================================================
# CONNECTION DRIVER - Interface Between Supervisor and Database Adapters
# ==============================================================================
# The supervisor only needs connect/disconnect and lifecycle events, so any
# adapter (or a test fake) that provides them can be supervised.
# ==============================================================================

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Protocol, runtime_checkable

from pawsitiv.core.constants import ConnectionEvents

logger = logging.getLogger(__name__)

EventHandler = Callable[..., Any]


@runtime_checkable
class ConnectionDriver(Protocol):
    """
    Minimal surface the ConnectionSupervisor drives.

    ``connect`` must raise on failure and must be safe to call again after
    a failure. Events are the names in ``ConnectionEvents``.
    """

    @property
    def is_connected(self) -> bool:
        ...

    async def connect(self) -> None:
        ...

    async def disconnect(self) -> None:
        ...

    def on(self, event: str, handler: EventHandler) -> None:
        ...


class DriverEventEmitter:
    """
    Synchronous event registry for connection lifecycle events.

    Handlers run on the caller's thread in registration order. Drivers that
    observe events on foreign threads must hop onto the event loop before
    calling ``emit`` (see ``MongoDBAdapter``).

    ``reconnected`` is emitted automatically when a driver reports
    ``connected`` after having reported ``disconnected``.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)
        self._lost_connection = False

    def on(self, event: str, handler: EventHandler) -> None:
        """
        Register a handler for a lifecycle event.

        Raises:
            ValueError: If the event name is unknown
        """
        if event not in ConnectionEvents.all_events():
            raise ValueError(f"Unknown connection event: {event}")
        self._listeners[event].append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> None:
        """Call every handler registered for ``event``."""
        for handler in list(self._listeners.get(event, [])):
            try:
                handler(*args)
            except Exception:
                logger.exception("Connection event handler for %r failed", event)

    # --------------------------------------------------------------------------
    # Helpers for drivers
    # --------------------------------------------------------------------------

    def _notify_connected(self) -> None:
        self.emit(ConnectionEvents.CONNECTED)
        if self._lost_connection:
            self._lost_connection = False
            self.emit(ConnectionEvents.RECONNECTED)

    def _notify_disconnected(self) -> None:
        if self._lost_connection:
            return
        self._lost_connection = True
        self.emit(ConnectionEvents.DISCONNECTED)

    def _notify_error(self, error: BaseException) -> None:
        self.emit(ConnectionEvents.ERROR, error)
