# ==============================================================================
# EVENT BROADCASTER - Driver Lifecycle Events to Logs and Reconnects
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Set, Tuple

from pawsitiv.core.constants import ConnectionEvents
from pawsitiv.core.exceptions import ConnectionClosedError

if TYPE_CHECKING:
    from pawsitiv.database.connection.supervisor import ConnectionSupervisor

logger = logging.getLogger(__name__)


class EventBroadcaster:
    """
    Listens to the supervised driver and reacts to its lifecycle events.

    - ``connected``: informational log
    - ``disconnected``: warning log, then ``supervisor.connect()``
    - ``error``: error log only
    - ``reconnected``: informational log

    Reconnects go through ``connect()`` so they share its re-entrancy guard
    and retry bound.
    """

    def __init__(self, supervisor: "ConnectionSupervisor") -> None:
        self._supervisor = supervisor
        self._attached = False
        self._reconnects: Set[asyncio.Task] = set()

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def pending_reconnects(self) -> Tuple[asyncio.Task, ...]:
        """Reconnect tasks started by ``disconnected`` events and not yet done."""
        return tuple(self._reconnects)

    def attach(self) -> None:
        """Register the handlers on the driver. Safe to call repeatedly."""
        if self._attached:
            return

        driver = self._supervisor.driver
        driver.on(ConnectionEvents.CONNECTED, self.on_connected)
        driver.on(ConnectionEvents.DISCONNECTED, self.on_disconnected)
        driver.on(ConnectionEvents.ERROR, self.on_error)
        driver.on(ConnectionEvents.RECONNECTED, self.on_reconnected)
        self._attached = True
        logger.debug("Database connection event handlers attached")

    # --------------------------------------------------------------------------
    # Handlers
    # --------------------------------------------------------------------------

    def on_connected(self, *args: Any) -> None:
        logger.info("Database connection is active")

    def on_disconnected(self, *args: Any) -> None:
        if self._supervisor.is_closed:
            logger.debug("Ignoring disconnect after close()")
            return

        logger.warning("Database disconnected, attempting to reconnect")
        self._supervisor.mark_disconnected()

        task = asyncio.ensure_future(self._supervisor.connect())
        self._reconnects.add(task)
        task.add_done_callback(self._reconnect_done)

    def on_error(self, error: Any = None, *args: Any) -> None:
        logger.error("Database connection error: %s", error)

    def on_reconnected(self, *args: Any) -> None:
        logger.info("Database reconnected")

    def _reconnect_done(self, task: asyncio.Task) -> None:
        self._reconnects.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if isinstance(error, ConnectionClosedError):
            logger.debug("Reconnect abandoned: connection was closed")
        elif error is not None:
            logger.error("Database reconnect failed: %s", error)
