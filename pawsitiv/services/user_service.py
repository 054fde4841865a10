# ==============================================================================
# USER SERVICE - Authentication & User Management
# ==============================================================================
# Business logic for user accounts, login and cat subscriptions
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pawsitiv.core.constants import CatConstants, DatabaseConstants, ErrorMessages
from pawsitiv.core.exceptions import AlreadyExistsError, AuthenticationError, NotFoundError
from pawsitiv.core.security import hash_password, verify_password
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.schemas.user import UserCreate, UserRegister, UserResponse, UserUpdate
from pawsitiv.services.base_service import BaseService, entity_value

logger = logging.getLogger(__name__)


class UserService(BaseService[UserCreate, UserUpdate, UserResponse]):
    """
    User service for authentication and profile management.

    Passwords are hashed on every write and never leave the service:
    ``UserResponse`` has no password field.
    """

    _not_found_message = ErrorMessages.USER_NOT_FOUND

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.USERS_COLLECTION)

    def _to_response(self, entity: Any) -> UserResponse:
        return UserResponse.model_validate(entity)

    async def _ensure_unique(
        self,
        username: Optional[str],
        email: Optional[str],
        exclude_id: Optional[str] = None,
    ) -> None:
        for field, value in (("username", username), ("email", email)):
            if value is None:
                continue
            existing = await self._adapter.find_one(self._collection_name, {field: value})
            if existing is not None and str(entity_value(existing, "id")) != exclude_id:
                raise AlreadyExistsError(
                    message=f"A user with this {field} already exists",
                    resource_type="user",
                    details={"field": field},
                )

    # ==========================================================================
    # REGISTRATION & AUTHENTICATION
    # ==========================================================================

    async def create(self, schema: UserRegister) -> UserResponse:
        """
        Create a user with a hashed password.

        Accepts both ``UserRegister`` (self-service) and ``UserCreate``
        (admin endpoint); only the latter can set ``is_admin``.

        Raises:
            AlreadyExistsError: If username or email is taken
        """
        await self._ensure_unique(schema.username, schema.email)

        data = schema.model_dump(exclude={"password"}, exclude_none=True)
        data["password"] = hash_password(schema.password)
        data.setdefault("is_admin", False)
        data.setdefault("profile_picture", CatConstants.DEFAULT_PROFILE_PICTURE)
        data["subscribed_cats"] = []

        result = await self._adapter.create(self._collection_name, data)
        logger.info("Created user %s", schema.username)
        return self._to_response(result)

    async def register(self, schema: UserRegister) -> UserResponse:
        return await self.create(schema)

    async def authenticate(self, email: str, password: str) -> UserResponse:
        """
        Check credentials and return the user.

        Raises:
            AuthenticationError: If the email is unknown or the password wrong
        """
        user = await self._adapter.find_one(self._collection_name, {"email": email})
        if user is None:
            raise AuthenticationError(message=ErrorMessages.INVALID_CREDENTIALS)

        hashed = entity_value(user, "password")
        if not hashed or not verify_password(password, hashed):
            raise AuthenticationError(message=ErrorMessages.INVALID_CREDENTIALS)

        return self._to_response(user)

    # ==========================================================================
    # PROFILE MANAGEMENT
    # ==========================================================================

    async def update(self, id: Any, schema: UserUpdate) -> UserResponse:
        """
        Update profile fields; a new password is hashed.

        Raises:
            NotFoundError: If user not found
            AlreadyExistsError: If the new username or email is taken
        """
        await self._get_entity(id)
        await self._ensure_unique(schema.username, schema.email, exclude_id=str(id))

        data = schema.model_dump(exclude_unset=True, exclude={"password"})
        if schema.password is not None:
            data["password"] = hash_password(schema.password)
        if not data:
            return await self.get_by_id(id)

        result = await self._adapter.update(self._collection_name, id, data)
        if result is None:
            raise self._not_found(id)
        return self._to_response(result)

    async def delete(self, id: Any) -> bool:
        """Delete a user together with their notifications."""
        await self._get_entity(id)
        removed = await self._adapter.bulk_delete(
            DatabaseConstants.NOTIFICATIONS_COLLECTION,
            {"user_id": str(id)},
        )
        logger.debug("Removed %d notifications of user %s", removed, id)
        return await super().delete(id)

    # ==========================================================================
    # SUBSCRIPTIONS
    # ==========================================================================

    async def _require_cat(self, cat_id: str) -> None:
        if not await self._adapter.exists(DatabaseConstants.CATS_COLLECTION, {"id": cat_id}):
            raise NotFoundError(
                message=ErrorMessages.CAT_NOT_FOUND,
                resource_type="cat",
                resource_id=cat_id,
            )

    async def subscribe(self, user_id: Any, cat_id: str) -> UserResponse:
        """
        Follow a cat. Subscribing twice is a no-op.

        Raises:
            NotFoundError: If the user or the cat does not exist
        """
        await self._get_entity(user_id)
        await self._require_cat(cat_id)

        result = await self._adapter.append_to_list(
            self._collection_name,
            user_id,
            "subscribed_cats",
            cat_id,
            unique=True,
        )
        if result is None:
            raise self._not_found(user_id)
        return self._to_response(result)

    async def unsubscribe(self, user_id: Any, cat_id: str) -> UserResponse:
        result = await self._adapter.remove_from_list(
            self._collection_name,
            user_id,
            "subscribed_cats",
            cat_id,
        )
        if result is None:
            raise self._not_found(user_id)
        return self._to_response(result)

    async def get_subscribed_cat_ids(self, user_id: Any) -> List[str]:
        user = await self._get_entity(user_id)
        return list(entity_value(user, "subscribed_cats") or [])

    async def remove_cat_from_subscriptions(self, cat_id: str) -> int:
        """Drop a deleted cat from every subscription list."""
        return await self._adapter.remove_from_all_lists(
            self._collection_name,
            "subscribed_cats",
            cat_id,
        )
