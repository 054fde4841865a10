# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation & Lifecycle Management
# ==============================================================================
# Creates the configured adapter and the ConnectionSupervisor that owns it
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pawsitiv.core.exceptions import ServiceUnavailableError
from pawsitiv.core.settings import DatabaseType, get_settings
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.database.adapters.mongodb_adapter import MongoDBAdapter
from pawsitiv.database.adapters.postgresql_adapter import PostgreSQLAdapter
from pawsitiv.database.adapters.sql_adapter import SQLAlchemyAdapter
from pawsitiv.database.adapters.sqlite_adapter import SQLiteAdapter
from pawsitiv.database.connection.config import ConnectionConfig
from pawsitiv.database.connection.supervisor import ConnectionSupervisor

logger = logging.getLogger(__name__)


class DatabaseFactory:
    """
    Process-wide holder of the database adapter and its supervisor.

    Class Attributes:
        _adapter: The active adapter
        _supervisor: Supervisor driving ``_adapter``

    Example:
        >>> # Application startup
        >>> await DatabaseFactory.initialize()
        >>>
        >>> adapter = DatabaseFactory.get_adapter()
        >>> cat = await adapter.get_by_id("cats", cat_id)
        >>>
        >>> # Application shutdown
        >>> await DatabaseFactory.shutdown()
    """

    _adapter: Optional[BaseDatabaseAdapter] = None
    _supervisor: Optional[ConnectionSupervisor] = None

    @classmethod
    def create_adapter(cls, config: ConnectionConfig) -> BaseDatabaseAdapter:
        """
        Build an adapter for ``config.database_type``.

        Raises:
            ValueError: If database type is not supported
        """
        db_type = DatabaseType(config.database_type)
        adapter: BaseDatabaseAdapter

        if db_type == DatabaseType.SQLITE:
            adapter = SQLiteAdapter(config)
        elif db_type == DatabaseType.POSTGRESQL:
            adapter = PostgreSQLAdapter(config)
        elif db_type == DatabaseType.MONGODB:
            adapter = MongoDBAdapter(config)
        else:
            raise ValueError(f"Unsupported database type: {db_type}")

        if isinstance(adapter, SQLAlchemyAdapter):
            cls._register_models(adapter)

        logger.info("Created %s adapter", db_type.value)
        return adapter

    @classmethod
    async def initialize(
        cls,
        config: Optional[ConnectionConfig] = None,
    ) -> BaseDatabaseAdapter:
        """
        Connect the database and wire connection events.

        Args:
            config: Connection config (defaults to settings)

        Returns:
            Connected database adapter

        Raises:
            ConnectionExhaustedError: If every connection attempt failed
        """
        if cls._supervisor is not None and cls._supervisor.is_connected:
            return cls._adapter

        config = config or get_settings().connection_config()
        adapter = cls.create_adapter(config)
        supervisor = ConnectionSupervisor(adapter, config)

        cls._adapter = adapter
        cls._supervisor = supervisor

        await supervisor.connect()
        supervisor.setup_events()

        logger.info("Database initialized: %s", config.database_type)
        return adapter

    @classmethod
    def _register_models(cls, adapter: SQLAlchemyAdapter) -> None:
        """Register all domain models with a SQL adapter."""
        from pawsitiv.domain_models import (
            Answer,
            Cat,
            CatImage,
            Notification,
            Poll,
            User,
        )
        from pawsitiv.core.constants import DatabaseConstants as C

        adapter.register_model(C.USERS_COLLECTION, User)
        adapter.register_model(C.CATS_COLLECTION, Cat)
        adapter.register_model(C.CAT_IMAGES_COLLECTION, CatImage)
        adapter.register_model(C.NOTIFICATIONS_COLLECTION, Notification)
        adapter.register_model(C.POLLS_COLLECTION, Poll)
        adapter.register_model(C.ANSWERS_COLLECTION, Answer)

    @classmethod
    async def shutdown(cls) -> None:
        """Close the supervised connection and forget the adapter."""
        if cls._supervisor is not None:
            await cls._supervisor.close()
        cls._adapter = None
        cls._supervisor = None
        logger.info("Database connections closed")

    @classmethod
    def get_adapter(cls) -> BaseDatabaseAdapter:
        """
        Get the active adapter.

        Raises:
            ServiceUnavailableError: If adapter not initialized
        """
        if cls._adapter is None:
            raise ServiceUnavailableError(
                "Database adapter not initialized",
                service_name="database",
            )
        return cls._adapter

    @classmethod
    def get_supervisor(cls) -> Optional[ConnectionSupervisor]:
        return cls._supervisor

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._adapter is not None

    @classmethod
    async def health_check(cls) -> Dict[str, Any]:
        """
        Database health for the health endpoints.

        Returns:
            Dict with ``healthy`` plus the supervisor snapshot
        """
        if cls._adapter is None or cls._supervisor is None:
            return {"healthy": False, "status": "idle"}

        healthy = await cls._adapter.health_check()
        report: Dict[str, Any] = {"healthy": healthy, **cls._supervisor.snapshot()}
        if isinstance(cls._adapter, PostgreSQLAdapter):
            report["pool"] = await cls._adapter.get_pool_status()
        return report

    @classmethod
    def reset(cls) -> None:
        """
        Reset factory state without disconnecting.

        Primarily for testing purposes.
        """
        cls._adapter = None
        cls._supervisor = None
