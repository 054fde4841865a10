# ==============================================================================
# POSTGRESQL ADAPTER - SQLAlchemy Async with asyncpg
# ==============================================================================
# Pooled production adapter
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict

from pawsitiv.database.adapters.sql_adapter import SQLAlchemyAdapter


class PostgreSQLAdapter(SQLAlchemyAdapter):
    """
    PostgreSQL adapter using the asyncpg driver.

    Connection Pool Configuration:
        - pool_size:     connections kept open (``DB_POOL_SIZE``)
        - max_overflow:  extra connections allowed (``DB_MAX_OVERFLOW``)
        - pool_recycle:  seconds before a connection is recycled
        - pool_pre_ping: stale connections are replaced transparently

    asyncpg receives ``connect_timeout`` as its per-connection ``timeout``
    and ``idle_timeout`` as ``command_timeout``.
    """

    backend_name = "PostgreSQL"

    def _engine_options(self) -> Dict[str, Any]:
        return {
            "echo": self._config.echo,
            "pool_size": self._config.pool_size,
            "max_overflow": self._config.max_overflow,
            "pool_timeout": self._config.connect_timeout,
            "pool_recycle": self._config.pool_recycle,
            "pool_pre_ping": True,
            "connect_args": {
                "timeout": self._config.connect_timeout,
                "command_timeout": self._config.idle_timeout,
            },
        }

    async def get_pool_status(self) -> Dict[str, int]:
        """
        Current connection pool statistics.

        Returns:
            Dict with size, checked_in, checked_out, overflow
        """
        if self._engine is None:
            return {"size": 0, "checked_in": 0, "checked_out": 0, "overflow": 0}
        pool = self._engine.pool
        return {
            "size": pool.size(),
            "checked_in": pool.checkedin(),
            "checked_out": pool.checkedout(),
            "overflow": pool.overflow(),
        }
