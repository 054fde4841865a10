# ==============================================================================
# CAT SERVICE - Cat Profiles, Filtering & Image Uploads
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from pawsitiv.core.constants import DatabaseConstants, ErrorMessages
from pawsitiv.core.exceptions import NotFoundError
from pawsitiv.core.settings import Settings, get_settings
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.schemas.cat import CatCreate, CatImageResponse, CatResponse, CatUpdate
from pawsitiv.services.base_service import BaseService, entity_value
from pawsitiv.services.user_service import UserService
from pawsitiv.utils.images import compress_image, validate_upload

logger = logging.getLogger(__name__)


class CatService(BaseService[CatCreate, CatUpdate, CatResponse]):
    """
    Cat profile management.

    Deleting a cat also removes its images, its notifications and every
    subscription to it. Uploaded photos are compressed before storage and
    served back from ``{API_PREFIX}/cats/{cat_id}/images/{image_id}``.
    """

    _not_found_message = ErrorMessages.CAT_NOT_FOUND

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__(adapter, DatabaseConstants.CATS_COLLECTION)
        self._settings = settings or get_settings()

    def _to_response(self, entity: Any) -> CatResponse:
        return CatResponse.model_validate(entity)

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    async def list_cats(
        self,
        skip: int = 0,
        limit: int = 100,
        location: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[CatResponse]:
        """
        List cats, optionally by exact location and personality tag.

        Tag matching happens here rather than in the query because JSON
        array containment differs between SQLite, PostgreSQL and MongoDB.
        """
        filters = {"location": location} if location else None

        if tag is None:
            return await self.get_all(
                skip=skip,
                limit=limit,
                filters=filters,
                sort_by="created_at",
            )

        wanted = tag.strip().lower()
        batch_size = DatabaseConstants.MAX_BATCH_SIZE
        matching: List[CatResponse] = []
        offset = 0
        while len(matching) < skip + limit:
            page = await self.get_all(
                skip=offset,
                limit=batch_size,
                filters=filters,
                sort_by="created_at",
            )
            matching.extend(
                cat for cat in page
                if wanted in (t.lower() for t in cat.personality_tags)
            )
            if len(page) < batch_size:
                break
            offset += batch_size
        return matching[skip:skip + limit]

    # ==========================================================================
    # MUTATIONS
    # ==========================================================================

    async def create(self, schema: CatCreate) -> CatResponse:
        cat = await super().create(schema)
        logger.info("Created cat %s (%s)", cat.name, cat.id)
        return cat

    async def delete(self, id: Any) -> bool:
        """
        Delete a cat and everything that references it.

        Raises:
            NotFoundError: If cat not found
        """
        await self._get_entity(id)
        cat_id = str(id)

        notifications = await self._adapter.bulk_delete(
            DatabaseConstants.NOTIFICATIONS_COLLECTION,
            {"cat_id": cat_id},
        )
        images = await self._adapter.bulk_delete(
            DatabaseConstants.CAT_IMAGES_COLLECTION,
            {"cat_id": cat_id},
        )
        subscribers = await UserService(self._adapter).remove_cat_from_subscriptions(cat_id)

        await super().delete(id)
        logger.info(
            "Deleted cat %s with %d images, %d notifications, %d subscriptions",
            cat_id, images, notifications, subscribers,
        )
        return True

    # ==========================================================================
    # IMAGES
    # ==========================================================================

    def image_url(self, cat_id: str, image_id: str) -> str:
        return f"{self._settings.API_PREFIX}/cats/{cat_id}/images/{image_id}"

    async def add_image(
        self,
        cat_id: Any,
        filename: Optional[str],
        raw: bytes,
    ) -> CatImageResponse:
        """
        Validate, compress and store an uploaded photo, then append its URL
        to the cat's ``images``.

        Raises:
            NotFoundError: If cat not found
            UnsupportedFileTypeError: Extension not allowed (415)
            FileTooLargeError: Upload over MAX_UPLOAD_SIZE (413)
            BadRequestError: Empty or undecodable file
        """
        await self._get_entity(cat_id)
        validate_upload(filename, len(raw), self._settings.MAX_UPLOAD_SIZE)

        compressed = await run_in_threadpool(
            compress_image,
            raw,
            max_dimension=self._settings.IMAGE_MAX_DIMENSION,
            quality=self._settings.IMAGE_QUALITY,
        )
        stored = await self._adapter.create(
            DatabaseConstants.CAT_IMAGES_COLLECTION,
            {
                "cat_id": str(cat_id),
                "content_type": compressed.content_type,
                "data": compressed.data,
            },
        )
        image_id = str(entity_value(stored, "id"))
        url = self.image_url(str(cat_id), image_id)

        cat = await self._adapter.append_to_list(
            self._collection_name,
            cat_id,
            "images",
            url,
        )
        if cat is None:
            await self._adapter.delete(DatabaseConstants.CAT_IMAGES_COLLECTION, image_id)
            raise self._not_found(cat_id)

        logger.info("Stored image %s for cat %s", image_id, cat_id)
        return CatImageResponse(
            id=image_id,
            cat_id=str(cat_id),
            content_type=compressed.content_type,
            size=len(compressed.data),
            url=url,
            created_at=entity_value(stored, "created_at"),
            updated_at=entity_value(stored, "updated_at"),
        )

    async def get_image(self, cat_id: Any, image_id: Any) -> Tuple[bytes, str]:
        """
        Return ``(data, content_type)`` of a stored image.

        Raises:
            NotFoundError: If the image does not exist or belongs to another cat
        """
        image = await self._adapter.get_by_id(
            DatabaseConstants.CAT_IMAGES_COLLECTION,
            image_id,
        )
        if image is None or str(entity_value(image, "cat_id")) != str(cat_id):
            raise NotFoundError(
                message=ErrorMessages.CAT_IMAGE_NOT_FOUND,
                resource_type="cat_image",
                resource_id=str(image_id),
            )
        return bytes(entity_value(image, "data")), entity_value(image, "content_type")
