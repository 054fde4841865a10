# ==============================================================================
# SQLITE ADAPTER - SQLAlchemy Async with aiosqlite
# ==============================================================================
# File-based database for development and testing
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict

from pawsitiv.database.adapters.sql_adapter import SQLAlchemyAdapter
from pawsitiv.database.connection.config import ConnectionConfig


class SQLiteAdapter(SQLAlchemyAdapter):
    """
    SQLite database adapter using SQLAlchemy async with aiosqlite.

    Tables are created on every successful ``connect()``.

    Example:
        >>> adapter = SQLiteAdapter(ConnectionConfig(uri="sqlite+aiosqlite:///./pawsitiv.db"))
        >>> adapter.register_model("cats", Cat)
        >>> await adapter.connect()
    """

    backend_name = "SQLite"

    def __init__(self, config: ConnectionConfig) -> None:
        super().__init__(config)
        # Ensure async driver is used
        url = config.uri
        if "sqlite://" in url and "aiosqlite" not in url:
            url = url.replace("sqlite://", "sqlite+aiosqlite://")
        self._database_url = url

    def _engine_options(self) -> Dict[str, Any]:
        return {
            "echo": self._config.echo,
            "connect_args": {
                "check_same_thread": False,
                "timeout": self._config.connect_timeout,
            },
        }
