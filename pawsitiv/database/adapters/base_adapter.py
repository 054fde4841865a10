# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# Defines the contract for all database adapters
# Every adapter is also a ConnectionDriver the supervisor can drive
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Generic,
    List,
    Optional,
    TypeVar,
)

from pawsitiv.database.connection.config import ConnectionConfig
from pawsitiv.database.connection.driver import DriverEventEmitter

# Type variable for generic database records
T = TypeVar("T")


class BaseDatabaseAdapter(DriverEventEmitter, ABC, Generic[T]):
    """
    Abstract Base Class for Database Adapters.

    Provides a unified CRUD interface across database backends and the
    connection driver surface (``connect``, ``disconnect``, ``on``,
    ``is_connected``) used by ``ConnectionSupervisor``.

    ``connect`` makes exactly one attempt and raises ``ConnectionError`` on
    failure; retrying is the supervisor's job.

    Generic Parameters:
        T: The type of records returned by the adapter

    Example:
        >>> adapter = SQLiteAdapter(config)
        >>> await adapter.connect()
        >>> cat = await adapter.create("cats", {"name": "Yuna", "location": "Besaid"})
        >>> await adapter.disconnect()
    """

    def __init__(self, config: ConnectionConfig) -> None:
        super().__init__()
        self._config = config
        self._connected = False

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._connected

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Make one connection attempt.

        Replaces any previous engine/client, verifies the server answers
        within ``connect_timeout``, then emits ``connected``.

        Raises:
            ConnectionError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close database connection.

        Intentional disconnects do not emit ``disconnected``.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """
        pass

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @abstractmethod
    @asynccontextmanager
    async def session(self) -> AsyncIterator[Any]:
        """
        Provide a transactional session scope.

        Yields:
            Session object appropriate for the database type

        Raises:
            ServiceUnavailableError: If database is not connected
        """
        pass

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
    ) -> T:
        """
        Create a new record.

        Args:
            collection: Table/collection name
            data: Record data as dictionary

        Returns:
            Created record with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(
        self,
        collection: str,
        id: Any,
    ) -> Optional[T]:
        """
        Retrieve a record by its primary identifier.

        Unparseable ids behave like unknown ids and return None.
        """
        pass

    @abstractmethod
    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[T]:
        """
        Retrieve multiple records with pagination and equality filters.

        Args:
            collection: Table/collection name
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return
            filters: Field-value pairs for filtering
            sort_by: Field name to sort by
            sort_order: Sort direction ("asc" or "desc")
        """
        pass

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[T]:
        """
        Update an existing record (partial update).

        Returns:
            Updated record if found, None if not exists
        """
        pass

    @abstractmethod
    async def delete(
        self,
        collection: str,
        id: Any,
    ) -> bool:
        """
        Delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        pass

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        pass

    async def exists(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> bool:
        """Check if any record matches the filters."""
        return await self.count(collection, filters) > 0

    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> Optional[T]:
        """First record matching filters, None if no match."""
        results = await self.get_all(collection, skip=0, limit=1, filters=filters)
        return results[0] if results else None

    # ==========================================================================
    # BULK OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def bulk_create(
        self,
        collection: str,
        data: List[Dict[str, Any]],
    ) -> List[T]:
        """Bulk insert multiple records."""
        pass

    @abstractmethod
    async def bulk_update(
        self,
        collection: str,
        filters: Dict[str, Any],
        data: Dict[str, Any],
    ) -> int:
        """
        Bulk update records matching filters.

        Returns:
            Number of records updated
        """
        pass

    @abstractmethod
    async def bulk_delete(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> int:
        """
        Bulk delete records matching filters.

        Returns:
            Number of records deleted
        """
        pass

    # ==========================================================================
    # LIST FIELD OPERATIONS
    # ==========================================================================
    # Each call is a single atomic step in the backend

    @abstractmethod
    async def append_to_list(
        self,
        collection: str,
        id: Any,
        field: str,
        value: Any,
        unique: bool = False,
    ) -> Optional[T]:
        """
        Atomically append ``value`` to the list ``field`` of one record.

        Args:
            unique: Leave the list unchanged if it already holds ``value``

        Returns:
            Updated record if found, None if not exists
        """
        pass

    @abstractmethod
    async def remove_from_list(
        self,
        collection: str,
        id: Any,
        field: str,
        value: Any,
    ) -> Optional[T]:
        """Atomically remove every occurrence of ``value`` from one record's list."""
        pass

    @abstractmethod
    async def remove_from_all_lists(
        self,
        collection: str,
        field: str,
        value: Any,
    ) -> int:
        """
        Remove ``value`` from the list ``field`` of every record.

        Returns:
            Number of records changed
        """
        pass
