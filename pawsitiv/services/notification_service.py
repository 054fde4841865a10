# ==============================================================================
# NOTIFICATION SERVICE - Per-User Cat Notifications
# ==============================================================================

from __future__ import annotations

from typing import Any, List

from pawsitiv.core.constants import DatabaseConstants, ErrorMessages
from pawsitiv.core.exceptions import NotFoundError
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.domain_models.base import utcnow
from pawsitiv.schemas.notification import (
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
)
from pawsitiv.services.base_service import BaseService


class NotificationService(
    BaseService[NotificationCreate, NotificationUpdate, NotificationResponse]
):
    """Notification CRUD plus per-user listing and read tracking."""

    _not_found_message = ErrorMessages.NOTIFICATION_NOT_FOUND

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.NOTIFICATIONS_COLLECTION)

    def _to_response(self, entity: Any) -> NotificationResponse:
        return NotificationResponse.model_validate(entity)

    async def _require(self, collection: str, id: str, message: str) -> None:
        if not await self._adapter.exists(collection, {"id": id}):
            raise NotFoundError(message=message, resource_type=collection, resource_id=id)

    async def create(self, schema: NotificationCreate) -> NotificationResponse:
        """
        Create a notification for an existing user and cat.

        Raises:
            NotFoundError: If the user or the cat does not exist
        """
        await self._require(
            DatabaseConstants.USERS_COLLECTION,
            schema.user_id,
            ErrorMessages.USER_NOT_FOUND,
        )
        await self._require(
            DatabaseConstants.CATS_COLLECTION,
            schema.cat_id,
            ErrorMessages.CAT_NOT_FOUND,
        )

        data = schema.model_dump()
        if data.get("timestamp") is None:
            data["timestamp"] = utcnow()
        result = await self._adapter.create(self._collection_name, data)
        return self._to_response(result)

    async def get_for_user(
        self,
        user_id: str,
        unseen_only: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> List[NotificationResponse]:
        """Newest first."""
        filters = {"user_id": user_id}
        if unseen_only:
            filters["seen"] = False
        return await self.get_all(
            skip=skip,
            limit=limit,
            filters=filters,
            sort_by="timestamp",
            sort_order="desc",
        )

    async def mark_seen(self, id: Any) -> NotificationResponse:
        return await self.update(id, NotificationUpdate(seen=True))

    async def mark_all_seen(self, user_id: str) -> int:
        """Mark every unseen notification of a user as seen; returns the count."""
        return await self._adapter.bulk_update(
            self._collection_name,
            {"user_id": user_id, "seen": False},
            {"seen": True},
        )
