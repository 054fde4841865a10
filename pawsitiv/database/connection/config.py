# ==============================================================================
# CONNECTION CONFIG - Immutable Connection Parameters
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Connection parameters loaded once at startup.

    Built from ``Settings.connection_config()`` in the application and
    constructed directly in tests.

    Attributes:
        uri: Async driver URL (SQLAlchemy URL or MongoDB URI)
        database_type: ``sqlite``, ``postgresql`` or ``mongodb``
        database_name: MongoDB database name (unused for SQL backends)
        max_retries: Total connect attempts before giving up
        retry_delay_ms: Fixed wait between attempts
        connect_timeout_ms: Per-attempt driver timeout
        idle_timeout_ms: Socket idle timeout
    """

    uri: str
    database_type: str = "sqlite"
    database_name: Optional[str] = None
    max_retries: int = 10
    retry_delay_ms: int = 5000
    connect_timeout_ms: int = 5000
    idle_timeout_ms: int = 45000
    pool_size: int = 10
    max_overflow: int = 20
    pool_recycle: int = 3600
    echo: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.retry_delay_ms < 0:
            raise ValueError("retry_delay_ms must not be negative")
        if self.connect_timeout_ms <= 0:
            raise ValueError("connect_timeout_ms must be positive")

    @property
    def retry_delay(self) -> float:
        """Retry delay in seconds."""
        return self.retry_delay_ms / 1000

    @property
    def connect_timeout(self) -> float:
        """Connect timeout in seconds."""
        return self.connect_timeout_ms / 1000

    @property
    def idle_timeout(self) -> float:
        """Idle timeout in seconds."""
        return self.idle_timeout_ms / 1000

    def redacted_uri(self) -> str:
        """URI with any password masked, for log lines."""
        scheme, sep, rest = self.uri.partition("://")
        if not sep or "@" not in rest:
            return self.uri
        credentials, _, host = rest.rpartition("@")
        user = credentials.split(":", 1)[0]
        return f"{scheme}://{user}:***@{host}"
