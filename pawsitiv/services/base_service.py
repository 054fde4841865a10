# ==============================================================================
# BASE SERVICE - Generic Business Logic Layer
# ==============================================================================
# Abstract service providing common CRUD operations
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from pawsitiv.core.constants import DatabaseConstants
from pawsitiv.core.exceptions import NotFoundError
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter

# Type variables for generic service
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


def entity_value(entity: Any, field: str, default: Any = None) -> Any:
    """Read a field from an ORM row or a MongoDB document alike."""
    if isinstance(entity, dict):
        return entity.get(field, default)
    return getattr(entity, field, default)


async def fetch_all(
    adapter: BaseDatabaseAdapter,
    collection: str,
    filters: Optional[Dict[str, Any]] = None,
    sort_by: Optional[str] = None,
) -> List[Any]:
    """Every matching record, read in pages of ``MAX_BATCH_SIZE``."""
    batch_size = DatabaseConstants.MAX_BATCH_SIZE
    records: List[Any] = []
    while True:
        page = await adapter.get_all(
            collection,
            skip=len(records),
            limit=batch_size,
            filters=filters,
            sort_by=sort_by,
        )
        records.extend(page)
        if len(page) < batch_size:
            return records


class BaseService(ABC, Generic[CreateSchemaType, UpdateSchemaType, ResponseSchemaType]):
    """
    Abstract base service providing standard business operations.

    Services talk to the active database adapter directly. Entities come
    back as ORM rows from the SQL adapters and as dicts from MongoDB;
    response schemas validate both.

    Generic Parameters:
        CreateSchemaType: Pydantic schema for creation
        UpdateSchemaType: Pydantic schema for updates
        ResponseSchemaType: Pydantic schema for responses

    Attributes:
        _adapter: Database adapter for operations
        _collection_name: Table/collection identifier
        _not_found_message: Message for NotFoundError

    Example:
        >>> class PollService(BaseService[PollCreate, PollCreate, PollResponse]):
        ...     def _to_response(self, entity):
        ...         return PollResponse.model_validate(entity)
    """

    _not_found_message: str = "Resource not found"

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        collection_name: str,
    ) -> None:
        self._adapter = adapter
        self._collection_name = collection_name

    # ==========================================================================
    # ABSTRACT METHODS
    # ==========================================================================

    @abstractmethod
    def _to_response(self, entity: Any) -> ResponseSchemaType:
        """
        Convert entity to response schema.

        Args:
            entity: ORM row or MongoDB document

        Returns:
            Response schema instance
        """

    def _not_found(self, id: Any) -> NotFoundError:
        return NotFoundError(
            message=self._not_found_message,
            resource_type=self._collection_name,
            resource_id=str(id),
        )

    async def _get_entity(self, id: Any) -> Any:
        """Fetch the raw entity or raise NotFoundError."""
        entity = await self._adapter.get_by_id(self._collection_name, id)
        if entity is None:
            raise self._not_found(id)
        return entity

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, schema: CreateSchemaType) -> ResponseSchemaType:
        """
        Create a new entity.

        Args:
            schema: Creation schema with entity data

        Returns:
            Created entity as response schema
        """
        data = schema.model_dump()
        result = await self._adapter.create(self._collection_name, data)
        return self._to_response(result)

    async def get_by_id(self, id: Any) -> ResponseSchemaType:
        """
        Retrieve entity by ID.

        Raises:
            NotFoundError: If entity not found
        """
        return self._to_response(await self._get_entity(id))

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[ResponseSchemaType]:
        """
        Retrieve multiple entities with pagination.

        Args:
            skip: Records to skip
            limit: Maximum records
            filters: Equality filters on entity fields
            sort_by: Sort field
            sort_order: Sort direction

        Returns:
            List of entities as response schemas
        """
        results = await self._adapter.get_all(
            self._collection_name,
            skip=skip,
            limit=limit,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return [self._to_response(r) for r in results]

    async def update(
        self,
        id: Any,
        schema: UpdateSchemaType,
    ) -> ResponseSchemaType:
        """
        Update an existing entity with the fields the client sent.

        Raises:
            NotFoundError: If entity not found
        """
        data = schema.model_dump(exclude_unset=True)
        if not data:
            return await self.get_by_id(id)
        result = await self._adapter.update(self._collection_name, id, data)
        if result is None:
            raise self._not_found(id)
        return self._to_response(result)

    async def delete(self, id: Any) -> bool:
        """
        Delete an entity by ID.

        Raises:
            NotFoundError: If entity not found
        """
        deleted = await self._adapter.delete(self._collection_name, id)
        if not deleted:
            raise self._not_found(id)
        return True

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count entities matching filters."""
        return await self._adapter.count(self._collection_name, filters)

    async def exists(self, id: Any) -> bool:
        """Check if entity exists."""
        return await self._adapter.exists(self._collection_name, {"id": id})

    async def find_one(
        self,
        filters: Dict[str, Any],
    ) -> Optional[ResponseSchemaType]:
        """Find single entity by filters."""
        result = await self._adapter.find_one(self._collection_name, filters)
        return self._to_response(result) if result is not None else None
