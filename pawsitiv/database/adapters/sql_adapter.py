# ==============================================================================
# SQL ADAPTER - SQLAlchemy Async Base for SQLite and PostgreSQL
# ==============================================================================
# Shared engine lifecycle, model registry and CRUD for SQL backends
# Engine errors are forwarded as connection events
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Type

from sqlalchemy import and_, delete, event, func, select, text, update
from sqlalchemy.engine import ExceptionContext
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pawsitiv.core.exceptions import ConnectionError, ServiceUnavailableError
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.database.connection.config import ConnectionConfig

logger = logging.getLogger(__name__)


class SQLAlchemyAdapter(BaseDatabaseAdapter[Any]):
    """
    SQLAlchemy async adapter shared by SQLite and PostgreSQL.

    Subclasses provide ``backend_name`` and ``_engine_options()``.

    Connection events:
        - ``connected`` after the probe query and table creation succeed
        - ``error`` for every DBAPI error seen by the engine
        - ``disconnected`` when SQLAlchemy classifies an error as a
          disconnect (``ExceptionContext.is_disconnect``)

    Attributes:
        _engine: SQLAlchemy async engine
        _session_factory: Session factory for creating sessions
        _model_registry: Mapping of collection names to model classes
    """

    backend_name = "sql"

    def __init__(self, config: ConnectionConfig) -> None:
        super().__init__(config)
        self._database_url = config.uri
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._model_registry: Dict[str, Type[DeclarativeBase]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._list_lock = asyncio.Lock()

    # ==========================================================================
    # MODEL REGISTRY
    # ==========================================================================

    def register_model(
        self,
        name: str,
        model: Type[DeclarativeBase],
    ) -> None:
        """
        Register a SQLAlchemy model for table mapping.

        Args:
            name: Collection/table identifier
            model: SQLAlchemy model class
        """
        self._model_registry[name] = model
        logger.debug("Registered model '%s' -> %s", name, model.__name__)

    def _get_model(self, collection: str) -> Type[DeclarativeBase]:
        if collection not in self._model_registry:
            raise ValueError(
                f"Model '{collection}' not registered. "
                f"Available models: {list(self._model_registry.keys())}"
            )
        return self._model_registry[collection]

    @staticmethod
    def _conditions(model: Type[DeclarativeBase], filters: Optional[Dict[str, Any]]) -> list:
        if not filters:
            return []
        conditions = []
        for key, value in filters.items():
            if not hasattr(model, key):
                raise ValueError(f"Unknown filter field '{key}' for {model.__name__}")
            conditions.append(getattr(model, key) == value)
        return conditions

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    def _engine_options(self) -> Dict[str, Any]:
        raise NotImplementedError

    async def connect(self) -> None:
        """Create a fresh engine, probe it, and create tables."""
        await self._dispose_engine()
        self._loop = asyncio.get_running_loop()
        self._list_lock = asyncio.Lock()

        engine = create_async_engine(self._database_url, **self._engine_options())
        try:
            async with engine.begin() as conn:
                await asyncio.wait_for(
                    conn.execute(text("SELECT 1")),
                    timeout=self._config.connect_timeout,
                )
                from pawsitiv.domain_models.base import SQLBase
                await conn.run_sync(SQLBase.metadata.create_all)
        except Exception as e:
            await engine.dispose()
            raise ConnectionError(
                f"{self.backend_name} connection failed: {e}",
                cause=e,
            ) from e

        event.listen(engine.sync_engine, "handle_error", self._on_engine_error)
        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._connected = True
        logger.info("%s adapter connected", self.backend_name)
        self._notify_connected()

    async def disconnect(self) -> None:
        """Dispose the engine without emitting ``disconnected``."""
        if await self._dispose_engine():
            logger.info("%s adapter disconnected", self.backend_name)
        self._lost_connection = False

    async def _dispose_engine(self) -> bool:
        engine = self._engine
        self._engine = None
        self._session_factory = None
        self._connected = False
        if engine is None:
            return False
        if event.contains(engine.sync_engine, "handle_error", self._on_engine_error):
            event.remove(engine.sync_engine, "handle_error", self._on_engine_error)
        await engine.dispose()
        return True

    def _on_engine_error(self, context: ExceptionContext) -> None:
        error = context.original_exception
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._notify_error, error)
        if context.is_disconnect:
            loop.call_soon_threadsafe(self._handle_lost_connection)

    def _handle_lost_connection(self) -> None:
        self._connected = False
        self._notify_disconnected()

    async def health_check(self) -> bool:
        """Run ``SELECT 1`` through a session."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("%s health check failed: %s", self.backend_name, e)
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide transactional session scope.

        Commits on successful exit, rolls back on exception.

        Raises:
            ServiceUnavailableError: If database not connected
        """
        if not self._session_factory:
            raise ServiceUnavailableError(
                "Database not connected", service_name=self.backend_name
            )

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, collection: str, data: Dict[str, Any]) -> Any:
        model = self._get_model(collection)

        async with self.session() as session:
            instance = model(**data)
            session.add(instance)
            await session.flush()
            await session.refresh(instance)
            return instance

    async def get_by_id(self, collection: str, id: Any) -> Optional[Any]:
        model = self._get_model(collection)

        async with self.session() as session:
            return await session.get(model, str(id))

    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Any]:
        model = self._get_model(collection)

        query = select(model)
        conditions = self._conditions(model, filters)
        if conditions:
            query = query.where(and_(*conditions))

        if sort_by and hasattr(model, sort_by):
            order_column = getattr(model, sort_by)
            if sort_order.lower() == "desc":
                order_column = order_column.desc()
            query = query.order_by(order_column)

        query = query.offset(skip).limit(limit)

        async with self.session() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[Any]:
        model = self._get_model(collection)

        async with self.session() as session:
            instance = await session.get(model, str(id))
            if not instance:
                return None

            for key, value in data.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)

            await session.flush()
            await session.refresh(instance)
            return instance

    async def delete(self, collection: str, id: Any) -> bool:
        model = self._get_model(collection)

        async with self.session() as session:
            instance = await session.get(model, str(id))
            if not instance:
                return False

            await session.delete(instance)
            return True

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        model = self._get_model(collection)

        query = select(func.count()).select_from(model)
        conditions = self._conditions(model, filters)
        if conditions:
            query = query.where(and_(*conditions))

        async with self.session() as session:
            result = await session.execute(query)
            return result.scalar() or 0

    # ==========================================================================
    # BULK OPERATIONS
    # ==========================================================================

    async def bulk_create(
        self,
        collection: str,
        data: List[Dict[str, Any]],
    ) -> List[Any]:
        model = self._get_model(collection)

        async with self.session() as session:
            instances = [model(**item) for item in data]
            session.add_all(instances)
            await session.flush()

            for instance in instances:
                await session.refresh(instance)

            return instances

    async def bulk_update(
        self,
        collection: str,
        filters: Dict[str, Any],
        data: Dict[str, Any],
    ) -> int:
        model = self._get_model(collection)
        conditions = self._conditions(model, filters)
        if not conditions:
            raise ValueError("bulk_update requires at least one filter")

        async with self.session() as session:
            stmt = update(model).where(and_(*conditions)).values(**data)
            result = await session.execute(stmt)
            return result.rowcount

    async def bulk_delete(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> int:
        model = self._get_model(collection)
        conditions = self._conditions(model, filters)
        if not conditions:
            raise ValueError("bulk_delete requires at least one filter")

        async with self.session() as session:
            stmt = delete(model).where(and_(*conditions))
            result = await session.execute(stmt)
            return result.rowcount

    # ==========================================================================
    # LIST FIELD OPERATIONS
    # ==========================================================================
    # The row is read FOR UPDATE (PostgreSQL); SQLite has no row locks, so
    # list writes are also serialized on the adapter's lock.

    def _list_column(self, model: Type[DeclarativeBase], field: str) -> Any:
        if not hasattr(model, field):
            raise ValueError(f"Unknown list field '{field}' for {model.__name__}")
        return getattr(model, field)

    async def _change_list(
        self,
        collection: str,
        id: Any,
        field: str,
        change: Callable[[List[Any]], List[Any]],
    ) -> Optional[Any]:
        model = self._get_model(collection)
        self._list_column(model, field)

        async with self._list_lock:
            async with self.session() as session:
                instance = await session.get(model, str(id), with_for_update=True)
                if not instance:
                    return None

                current = list(getattr(instance, field) or [])
                changed = change(current)
                if changed != current:
                    setattr(instance, field, changed)
                    await session.flush()
                    await session.refresh(instance)
                return instance

    async def append_to_list(
        self,
        collection: str,
        id: Any,
        field: str,
        value: Any,
        unique: bool = False,
    ) -> Optional[Any]:
        def append(values: List[Any]) -> List[Any]:
            if unique and value in values:
                return values
            return values + [value]

        return await self._change_list(collection, id, field, append)

    async def remove_from_list(
        self,
        collection: str,
        id: Any,
        field: str,
        value: Any,
    ) -> Optional[Any]:
        return await self._change_list(
            collection,
            id,
            field,
            lambda values: [v for v in values if v != value],
        )

    async def remove_from_all_lists(
        self,
        collection: str,
        field: str,
        value: Any,
    ) -> int:
        model = self._get_model(collection)
        column = self._list_column(model, field)

        async with self._list_lock:
            async with self.session() as session:
                rows = (await session.execute(select(model.id, column))).all()
                changed = 0
                for row_id, values in rows:
                    if not values or value not in values:
                        continue
                    await session.execute(
                        update(model)
                        .where(model.id == row_id)
                        .values({field: [v for v in values if v != value]})
                    )
                    changed += 1
                return changed
