# ==============================================================================
# CATS ENDPOINTS - Cat Profiles & Photo Uploads
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, Query, Response, UploadFile, status

from pawsitiv.api.dependencies import CatServiceDep, CurrentUserID
from pawsitiv.core.constants import APIConstants, SuccessMessages
from pawsitiv.core.settings import get_settings
from pawsitiv.schemas.base import APIResponse
from pawsitiv.schemas.cat import CatCreate, CatImageResponse, CatResponse, CatUpdate

router = APIRouter(prefix="/cats", tags=["Cats"])


@router.get(
    "",
    response_model=APIResponse[List[CatResponse]],
    summary="List cats",
    description="Filter by exact location and/or personality tag.",
)
async def list_cats(
    service: CatServiceDep,
    location: Optional[str] = Query(None, max_length=200),
    tag: Optional[str] = Query(None, max_length=50),
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.MAX_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> APIResponse[List[CatResponse]]:
    cats = await service.list_cats(skip=skip, limit=limit, location=location, tag=tag)
    return APIResponse.ok(data=cats)


@router.post(
    "",
    response_model=APIResponse[CatResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create cat",
)
async def create_cat(
    schema: CatCreate,
    user_id: CurrentUserID,
    service: CatServiceDep,
) -> APIResponse[CatResponse]:
    cat = await service.create(schema)
    return APIResponse.ok(data=cat, message=SuccessMessages.CREATED)


@router.get(
    "/{cat_id}",
    response_model=APIResponse[CatResponse],
    summary="Get cat by ID",
)
async def get_cat(cat_id: str, service: CatServiceDep) -> APIResponse[CatResponse]:
    return APIResponse.ok(data=await service.get_by_id(cat_id))


@router.put(
    "/{cat_id}",
    response_model=APIResponse[CatResponse],
    summary="Update cat",
)
async def update_cat(
    cat_id: str,
    schema: CatUpdate,
    user_id: CurrentUserID,
    service: CatServiceDep,
) -> APIResponse[CatResponse]:
    cat = await service.update(cat_id, schema)
    return APIResponse.ok(data=cat, message=SuccessMessages.UPDATED)


@router.delete(
    "/{cat_id}",
    response_model=APIResponse[dict],
    summary="Delete cat",
    description="Also removes the cat's images, notifications and subscriptions.",
)
async def delete_cat(
    cat_id: str,
    user_id: CurrentUserID,
    service: CatServiceDep,
) -> APIResponse[dict]:
    await service.delete(cat_id)
    return APIResponse.ok(data=None, message=SuccessMessages.DELETED)


# ==============================================================================
# IMAGES
# ==============================================================================

@router.post(
    "/{cat_id}/images",
    response_model=APIResponse[CatImageResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload cat photo",
    description="jpeg, jpg, png, gif or webp up to MAX_UPLOAD_SIZE; stored compressed.",
)
async def upload_image(
    cat_id: str,
    user_id: CurrentUserID,
    service: CatServiceDep,
    file: UploadFile = File(...),
) -> APIResponse[CatImageResponse]:
    # One byte past the limit is enough for validate_upload to answer 413
    raw = await file.read(get_settings().MAX_UPLOAD_SIZE + 1)
    image = await service.add_image(cat_id, file.filename, raw)
    return APIResponse.ok(data=image, message=SuccessMessages.CREATED)


@router.get(
    "/{cat_id}/images/{image_id}",
    response_class=Response,
    summary="Download cat photo",
    responses={200: {"content": {"image/jpeg": {}, "image/webp": {}}}},
)
async def get_image(
    cat_id: str,
    image_id: str,
    service: CatServiceDep,
) -> Response:
    data, content_type = await service.get_image(cat_id, image_id)
    return Response(
        content=data,
        media_type=content_type,
        headers={"Cache-Control": "public, max-age=86400"},
    )
