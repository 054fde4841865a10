# ==============================================================================
# CONNECTION SUPERVISOR - Connect, Retry, Reconnect, Close
# ==============================================================================
# Owns the single shared database connection for the process. The FastAPI
# lifespan calls connect() + setup_events() on startup and close() on
# shutdown; DatabaseFactory holds the instance.
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pawsitiv.core.exceptions import (
    ConnectionClosedError,
    ConnectionExhaustedError,
)
from pawsitiv.database.connection.config import ConnectionConfig
from pawsitiv.database.connection.driver import ConnectionDriver
from pawsitiv.database.connection.events import EventBroadcaster
from pawsitiv.database.connection.retry import RetryScheduler

logger = logging.getLogger(__name__)


class ConnectionStatus(str, Enum):
    """Externally visible connection status."""
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass
class ConnectionState:
    """
    Mutable connection state, owned by one ConnectionSupervisor.

    Attributes:
        status: Current connection status
        is_connecting: True while an attempt chain is in flight
        retry_handle: Timer for the next scheduled retry, if any
        current_attempt: Failed attempts in the current chain
    """
    status: ConnectionStatus = ConnectionStatus.IDLE
    is_connecting: bool = False
    retry_handle: Optional[asyncio.TimerHandle] = None
    current_attempt: int = 0


class ConnectionSupervisor:
    """
    Supervises the database connection lifecycle.

    - ``connect()`` runs a bounded chain of fixed-delay attempts. Callers
      arriving while a chain is in flight wait for that chain instead of
      starting another one.
    - ``setup_events()`` wires driver events so an unexpected disconnect
      re-enters ``connect()``.
    - ``close()`` cancels a pending retry and disconnects the driver.

    Exhausted retries raise ``ConnectionExhaustedError``; deciding to exit
    the process is left to the caller.

    Example:
        >>> supervisor = ConnectionSupervisor(adapter, settings.connection_config())
        >>> await supervisor.connect()
        >>> supervisor.setup_events()
        >>> ...
        >>> await supervisor.close()
    """

    def __init__(self, driver: ConnectionDriver, config: ConnectionConfig) -> None:
        self.driver = driver
        self.config = config
        self.state = ConnectionState()
        self._scheduler = RetryScheduler(config, self.state)
        self._broadcaster = EventBroadcaster(self)
        self._inflight: Optional[asyncio.Task] = None
        self._closed = False
        # Bumped by close() so an attempt that was already in flight knows
        # its result is stale.
        self._generation = 0

    # --------------------------------------------------------------------------
    # Properties
    # --------------------------------------------------------------------------

    @property
    def status(self) -> ConnectionStatus:
        return self.state.status

    @property
    def is_connecting(self) -> bool:
        return self.state.is_connecting

    @property
    def is_connected(self) -> bool:
        return self.state.status == ConnectionStatus.CONNECTED

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def retry_phase(self) -> str:
        return self._scheduler.phase.value

    @property
    def events(self) -> EventBroadcaster:
        return self._broadcaster

    # --------------------------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------------------------

    async def connect(self) -> None:
        """
        Establish the connection, retrying up to ``max_retries`` attempts.

        Raises:
            ConnectionExhaustedError: Every attempt failed
            ConnectionClosedError: ``close()`` was called before the chain
                finished
        """
        if self._inflight is not None and not self._inflight.done():
            logger.info("Database connection already in progress, waiting for it")
            await asyncio.shield(self._inflight)
            return

        if self.state.status == ConnectionStatus.CONNECTED:
            logger.debug("Database already connected")
            return

        self._closed = False
        self.state.is_connecting = True
        self.state.status = ConnectionStatus.CONNECTING
        self._scheduler.reset()
        self._inflight = asyncio.ensure_future(
            self._connect_with_retry(self._generation)
        )
        await asyncio.shield(self._inflight)

    async def close(self) -> None:
        """
        Cancel any pending retry and release the connection.

        Idempotent; a second call only clears a stale retry handle.
        """
        self._closed = True
        self._generation += 1
        self._inflight = None

        if self._scheduler.cancel():
            logger.info("Pending database reconnect cancelled")

        if self.driver.is_connected:
            await self.driver.disconnect()
            logger.info("Database connection closed")

        self.state.is_connecting = False
        self.state.current_attempt = 0
        self.state.status = ConnectionStatus.IDLE

    def setup_events(self) -> None:
        """Attach lifecycle event handlers to the driver (once)."""
        self._broadcaster.attach()

    def mark_disconnected(self) -> None:
        """Record an unexpected drop reported by the driver."""
        if self.state.status == ConnectionStatus.CONNECTED:
            self.state.status = ConnectionStatus.DISCONNECTED

    def snapshot(self) -> Dict[str, Any]:
        """Connection status for health endpoints."""
        return {
            "status": self.state.status.value,
            "is_connecting": self.state.is_connecting,
            "current_attempt": self.state.current_attempt,
            "max_retries": self.config.max_retries,
            "retry_pending": self._scheduler.is_waiting,
            "database_type": self.config.database_type,
        }

    # --------------------------------------------------------------------------
    # Retry loop
    # --------------------------------------------------------------------------

    async def _connect_with_retry(self, generation: int) -> None:
        scheduler = self._scheduler
        max_retries = self.config.max_retries

        try:
            while True:
                attempt = scheduler.begin_attempt()
                logger.info(
                    "Connecting to %s database at %s (attempt %d/%d)",
                    self.config.database_type,
                    self.config.redacted_uri(),
                    attempt,
                    max_retries,
                )
                try:
                    await self.driver.connect()
                except Exception as exc:
                    if generation != self._generation:
                        raise ConnectionClosedError() from exc

                    if scheduler.record_failure():
                        logger.warning(
                            "Database connection attempt %d/%d failed: %s. "
                            "Retrying in %.1f seconds...",
                            attempt,
                            max_retries,
                            exc,
                            self.config.retry_delay,
                        )
                        await scheduler.wait()
                        continue

                    logger.critical(
                        "Failed to connect to database after multiple attempts "
                        "(%d/%d): %s",
                        attempt,
                        max_retries,
                        exc,
                    )
                    raise ConnectionExhaustedError(attempts=attempt, cause=exc) from exc

                if generation != self._generation:
                    # close() ran while this attempt was in flight
                    await self.driver.disconnect()
                    raise ConnectionClosedError()

                scheduler.record_success()
                self.state.status = ConnectionStatus.CONNECTED
                logger.info("Database connection established")
                return
        except BaseException:
            if self.state.status == ConnectionStatus.CONNECTING:
                self.state.status = ConnectionStatus.DISCONNECTED
            raise
        finally:
            if generation == self._generation:
                self.state.is_connecting = False
