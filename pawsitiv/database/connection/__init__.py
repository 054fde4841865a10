# ==============================================================================
# CONNECTION LIFECYCLE PACKAGE
# ==============================================================================

"""
Connection Lifecycle
====================

- ConnectionSupervisor: connect/close with bounded retries and a
  re-entrancy guard
- RetryScheduler: attempt counting and the cancellable retry timer
- EventBroadcaster: driver events to logs and self-healing reconnects
- ConnectionDriver: what an adapter must provide to be supervised
"""

from pawsitiv.database.connection.config import ConnectionConfig
from pawsitiv.database.connection.driver import ConnectionDriver, DriverEventEmitter
from pawsitiv.database.connection.events import EventBroadcaster
from pawsitiv.database.connection.retry import RetryPhase, RetryScheduler
from pawsitiv.database.connection.supervisor import (
    ConnectionState,
    ConnectionStatus,
    ConnectionSupervisor,
)

__all__ = [
    "ConnectionConfig",
    "ConnectionDriver",
    "DriverEventEmitter",
    "EventBroadcaster",
    "RetryPhase",
    "RetryScheduler",
    "ConnectionState",
    "ConnectionStatus",
    "ConnectionSupervisor",
]
