# ==============================================================================
# RETRY SCHEDULER - Bounded Fixed-Delay Retries
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pawsitiv.core.exceptions import ConnectionClosedError
from pawsitiv.database.connection.config import ConnectionConfig

if TYPE_CHECKING:
    from pawsitiv.database.connection.supervisor import ConnectionState

logger = logging.getLogger(__name__)


class RetryPhase(str, Enum):
    """Scheduler states."""
    IDLE = "idle"
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


class RetryScheduler:
    """
    Attempt counter and cancellable retry timer for one attempt chain.

    ``max_retries`` is the total number of driver connect calls a chain may
    make. Every retry waits the same ``retry_delay``.

    The scheduler writes ``current_attempt`` and ``retry_handle`` on the
    supervisor's ``ConnectionState``; nothing else touches them.

    Usage:
        scheduler.reset()
        while True:
            scheduler.begin_attempt()
            try:
                await driver.connect()
            except Exception:
                if scheduler.record_failure():
                    await scheduler.wait()
                    continue
                raise
            scheduler.record_success()
            break
    """

    def __init__(self, config: ConnectionConfig, state: "ConnectionState") -> None:
        self.config = config
        self.state = state
        self.phase = RetryPhase.IDLE
        self._waiter: Optional[asyncio.Future] = None

    @property
    def max_retries(self) -> int:
        return self.config.max_retries

    @property
    def is_waiting(self) -> bool:
        return self.state.retry_handle is not None

    # --------------------------------------------------------------------------
    # State transitions
    # --------------------------------------------------------------------------

    def reset(self) -> None:
        """Start a fresh chain."""
        self.state.current_attempt = 0
        self.phase = RetryPhase.IDLE

    def begin_attempt(self) -> int:
        """Enter ATTEMPTING; returns the 1-based number of this attempt."""
        self.phase = RetryPhase.ATTEMPTING
        return self.state.current_attempt + 1

    def record_success(self) -> None:
        self.state.current_attempt = 0
        self.phase = RetryPhase.SUCCEEDED

    def record_failure(self) -> bool:
        """
        Count a failed attempt.

        Returns:
            True if another attempt is allowed, False once the chain is
            exhausted
        """
        self.state.current_attempt += 1
        if self.state.current_attempt >= self.max_retries:
            self.phase = RetryPhase.EXHAUSTED
            return False
        return True

    # --------------------------------------------------------------------------
    # Timer
    # --------------------------------------------------------------------------

    async def wait(self) -> None:
        """
        Sleep ``retry_delay`` before the next attempt.

        Raises:
            ConnectionClosedError: If ``cancel()`` is called during the wait
        """
        loop = asyncio.get_running_loop()
        waiter = loop.create_future()
        self._waiter = waiter
        self.phase = RetryPhase.WAITING
        self.state.retry_handle = loop.call_later(
            self.config.retry_delay, self._fire, waiter
        )
        try:
            await waiter
        finally:
            if self._waiter is waiter:
                self._waiter = None
            if self.state.retry_handle is not None and waiter.done():
                self.state.retry_handle.cancel()
                self.state.retry_handle = None

    def _fire(self, waiter: asyncio.Future) -> None:
        self.state.retry_handle = None
        if not waiter.done():
            waiter.set_result(None)

    def cancel(self) -> bool:
        """
        Cancel a pending retry.

        Returns:
            True if a scheduled retry was cancelled
        """
        handle = self.state.retry_handle
        waiter = self._waiter
        self.state.retry_handle = None
        self._waiter = None

        if handle is not None:
            handle.cancel()
        if waiter is not None and not waiter.done():
            waiter.set_exception(ConnectionClosedError())
            self.phase = RetryPhase.IDLE
            return True
        return handle is not None
