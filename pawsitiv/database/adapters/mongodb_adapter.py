# ==============================================================================
# MONGODB ADAPTER - Motor Async Driver Implementation
# ==============================================================================
# Document-oriented database adapter with full async support
# Server heartbeats are bridged into connection events
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.monitoring import (
    ServerHeartbeatFailedEvent,
    ServerHeartbeatListener,
    ServerHeartbeatStartedEvent,
    ServerHeartbeatSucceededEvent,
)

from pawsitiv.core.exceptions import ConnectionError, ServiceUnavailableError
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.database.connection.config import ConnectionConfig

logger = logging.getLogger(__name__)


class _HeartbeatBridge(ServerHeartbeatListener):
    """
    Forwards pymongo heartbeat results from monitor threads to the loop.

    One bridge per client; it is deactivated when its client is replaced
    so late heartbeats from an old client are dropped.
    """

    def __init__(self, adapter: "MongoDBAdapter", loop: asyncio.AbstractEventLoop) -> None:
        self._adapter = adapter
        self._loop = loop
        self.active = True

    def started(self, event: ServerHeartbeatStartedEvent) -> None:
        pass

    def succeeded(self, event: ServerHeartbeatSucceededEvent) -> None:
        self._dispatch(self._adapter._on_heartbeat_ok)

    def failed(self, event: ServerHeartbeatFailedEvent) -> None:
        self._dispatch(self._adapter._on_heartbeat_failed, event.reply)

    def _dispatch(self, callback, *args: Any) -> None:
        if not self.active or self._loop.is_closed():
            return
        try:
            self._loop.call_soon_threadsafe(self._run_if_active, callback, *args)
        except RuntimeError:
            # Loop closed between the check and the call
            logger.debug("Dropped heartbeat event, event loop is closed")

    def _run_if_active(self, callback, *args: Any) -> None:
        if self.active:
            callback(*args)


class MongoDBAdapter(BaseDatabaseAdapter[Dict[str, Any]]):
    """
    MongoDB database adapter using Motor async driver.

    Features:
        - Automatic ObjectId <-> string conversion (``_id`` -> ``id``)
        - ``created_at`` / ``updated_at`` stamped on writes
        - Heartbeat failures emit ``error`` + ``disconnected``; the first
          successful heartbeat afterwards emits ``connected`` +
          ``reconnected``

    Attributes:
        _client: Motor async client
        _database: Target database instance

    Example:
        >>> adapter = MongoDBAdapter(settings.connection_config())
        >>> await adapter.connect()
        >>> doc = await adapter.create("cats", {"name": "Barrett"})
        >>> print(doc["id"])  # String ID
    """

    def __init__(self, config: ConnectionConfig) -> None:
        super().__init__(config)
        self._connection_url = config.uri
        self._database_name = config.database_name or "pawsitiv"
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None
        self._bridge: Optional[_HeartbeatBridge] = None

    # ==========================================================================
    # ID SERIALIZATION HELPERS
    # ==========================================================================

    @staticmethod
    def _serialize_id(document: Dict[str, Any]) -> Dict[str, Any]:
        """Rename ``_id`` to a string ``id``."""
        if document and "_id" in document:
            document["id"] = str(document.pop("_id"))
        return document

    @staticmethod
    def _deserialize_id(id_value: Any) -> Optional[ObjectId]:
        """String id to ObjectId; None for strings that are not ObjectIds."""
        if isinstance(id_value, ObjectId):
            return id_value
        try:
            return ObjectId(str(id_value))
        except (InvalidId, TypeError):
            return None

    def _build_query(
        self,
        filters: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Build MongoDB query from filter dictionary.

        ``id`` is mapped to ``_id``; operator dicts ($gt, $in, ...) pass
        through unchanged.
        """
        if not filters:
            return {}

        query = {}
        for key, value in filters.items():
            if key == "id":
                query["_id"] = self._deserialize_id(value)
            else:
                query[key] = value

        return query

    def _db(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise ServiceUnavailableError("Database not connected", service_name="MongoDB")
        return self._database

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """Create a fresh client and ping the server."""
        self._close_client()

        bridge = _HeartbeatBridge(self, asyncio.get_running_loop())
        client = AsyncIOMotorClient(
            self._connection_url,
            maxPoolSize=self._config.pool_size,
            minPoolSize=1,
            serverSelectionTimeoutMS=self._config.connect_timeout_ms,
            connectTimeoutMS=self._config.connect_timeout_ms,
            socketTimeoutMS=self._config.idle_timeout_ms,
            tz_aware=True,
            event_listeners=[bridge],
        )
        try:
            await client.admin.command("ping")
        except Exception as e:
            bridge.active = False
            client.close()
            raise ConnectionError(f"MongoDB connection failed: {e}", cause=e) from e

        self._client = client
        self._bridge = bridge
        self._database = client[self._database_name]
        self._connected = True
        logger.info("MongoDB adapter connected to %s", self._database_name)
        self._notify_connected()

    async def disconnect(self) -> None:
        """Close the client without emitting ``disconnected``."""
        if self._close_client():
            logger.info("MongoDB adapter disconnected")
        self._lost_connection = False

    def _close_client(self) -> bool:
        client = self._client
        if self._bridge is not None:
            self._bridge.active = False
        self._bridge = None
        self._client = None
        self._database = None
        self._connected = False
        if client is None:
            return False
        client.close()
        return True

    def _on_heartbeat_ok(self) -> None:
        if self._lost_connection and self._client is not None:
            self._connected = True
            self._notify_connected()

    def _on_heartbeat_failed(self, error: Any) -> None:
        if not self._connected:
            return
        self._connected = False
        self._notify_error(error)
        self._notify_disconnected()

    async def health_check(self) -> bool:
        try:
            if self._client is not None:
                await self._client.admin.command("ping")
                return True
            return False
        except Exception as e:
            logger.warning("MongoDB health check failed: %s", e)
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncIOMotorClientSession]:
        """
        Provide transactional session scope.

        MongoDB transactions require a replica set.
        """
        if self._client is None:
            raise ServiceUnavailableError("Database not connected", service_name="MongoDB")

        async with await self._client.start_session() as session:
            async with session.start_transaction():
                yield session

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
    ) -> Dict[str, Any]:
        # MongoDB generates _id
        data = {k: v for k, v in data.items() if k != "id"}
        now = self._now()
        data.setdefault("created_at", now)
        data.setdefault("updated_at", now)

        result = await self._db()[collection].insert_one(data)
        data.pop("_id", None)
        data["id"] = str(result.inserted_id)
        return data

    async def get_by_id(
        self,
        collection: str,
        id: Any,
    ) -> Optional[Dict[str, Any]]:
        object_id = self._deserialize_id(id)
        if object_id is None:
            return None
        document = await self._db()[collection].find_one({"_id": object_id})
        return self._serialize_id(document) if document else None

    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Dict[str, Any]]:
        query = self._build_query(filters)
        cursor = self._db()[collection].find(query)

        if sort_by:
            direction = ASCENDING if sort_order.lower() == "asc" else DESCENDING
            cursor = cursor.sort(sort_by, direction)

        cursor = cursor.skip(skip).limit(limit)

        documents = await cursor.to_list(length=limit)
        return [self._serialize_id(doc) for doc in documents]

    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        object_id = self._deserialize_id(id)
        if object_id is None:
            return None

        data = {k: v for k, v in data.items() if k != "id"}
        data["updated_at"] = self._now()

        result = await self._db()[collection].find_one_and_update(
            {"_id": object_id},
            {"$set": data},
            return_document=ReturnDocument.AFTER,
        )
        return self._serialize_id(result) if result else None

    async def delete(
        self,
        collection: str,
        id: Any,
    ) -> bool:
        object_id = self._deserialize_id(id)
        if object_id is None:
            return False
        result = await self._db()[collection].delete_one({"_id": object_id})
        return result.deleted_count > 0

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        query = self._build_query(filters)
        return await self._db()[collection].count_documents(query)

    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        query = self._build_query(filters)
        document = await self._db()[collection].find_one(query)
        return self._serialize_id(document) if document else None

    # ==========================================================================
    # BULK OPERATIONS
    # ==========================================================================

    async def bulk_create(
        self,
        collection: str,
        data: List[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        if not data:
            return []
        now = self._now()
        documents = []
        for item in data:
            document = {k: v for k, v in item.items() if k != "id"}
            document.setdefault("created_at", now)
            document.setdefault("updated_at", now)
            documents.append(document)

        result = await self._db()[collection].insert_many(documents)

        for document, inserted_id in zip(documents, result.inserted_ids):
            document.pop("_id", None)
            document["id"] = str(inserted_id)
        return documents

    async def bulk_update(
        self,
        collection: str,
        filters: Dict[str, Any],
        data: Dict[str, Any],
    ) -> int:
        if not filters:
            raise ValueError("bulk_update requires at least one filter")
        query = self._build_query(filters)
        result = await self._db()[collection].update_many(
            query,
            {"$set": {**data, "updated_at": self._now()}},
        )
        return result.modified_count

    async def bulk_delete(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> int:
        if not filters:
            raise ValueError("bulk_delete requires at least one filter")
        query = self._build_query(filters)
        result = await self._db()[collection].delete_many(query)
        return result.deleted_count

    # ==========================================================================
    # LIST FIELD OPERATIONS
    # ==========================================================================

    async def _update_list(
        self,
        collection: str,
        id: Any,
        operation: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        object_id = self._deserialize_id(id)
        if object_id is None:
            return None

        result = await self._db()[collection].find_one_and_update(
            {"_id": object_id},
            {**operation, "$set": {"updated_at": self._now()}},
            return_document=ReturnDocument.AFTER,
        )
        return self._serialize_id(result) if result else None

    async def append_to_list(
        self,
        collection: str,
        id: Any,
        field: str,
        value: Any,
        unique: bool = False,
    ) -> Optional[Dict[str, Any]]:
        operator = "$addToSet" if unique else "$push"
        return await self._update_list(collection, id, {operator: {field: value}})

    async def remove_from_list(
        self,
        collection: str,
        id: Any,
        field: str,
        value: Any,
    ) -> Optional[Dict[str, Any]]:
        return await self._update_list(collection, id, {"$pull": {field: value}})

    async def remove_from_all_lists(
        self,
        collection: str,
        field: str,
        value: Any,
    ) -> int:
        result = await self._db()[collection].update_many(
            {field: value},
            {"$pull": {field: value}, "$set": {"updated_at": self._now()}},
        )
        return result.modified_count
