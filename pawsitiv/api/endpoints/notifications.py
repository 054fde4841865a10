# ==============================================================================
# NOTIFICATIONS ENDPOINTS
# ==============================================================================
# Notification CRUD plus per-user inbox and read tracking
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from pawsitiv.api.dependencies import (
    AdminUser,
    CurrentUser,
    NotificationServiceDep,
    ensure_self_or_admin,
)
from pawsitiv.core.constants import APIConstants, SuccessMessages
from pawsitiv.schemas.base import APIResponse
from pawsitiv.schemas.notification import (
    MarkSeenResponse,
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


# ==============================================================================
# PER-USER INBOX
# ==============================================================================

@router.get(
    "/user/{user_id}",
    response_model=APIResponse[List[NotificationResponse]],
    summary="Notifications of a user",
)
async def list_for_user(
    user_id: str,
    current: CurrentUser,
    service: NotificationServiceDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.MAX_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> APIResponse[List[NotificationResponse]]:
    ensure_self_or_admin(current, user_id)
    items = await service.get_for_user(user_id, skip=skip, limit=limit)
    return APIResponse.ok(data=items)


@router.get(
    "/user/{user_id}/unseen",
    response_model=APIResponse[List[NotificationResponse]],
    summary="Unseen notifications of a user",
)
async def list_unseen_for_user(
    user_id: str,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[List[NotificationResponse]]:
    ensure_self_or_admin(current, user_id)
    items = await service.get_for_user(user_id, unseen_only=True)
    return APIResponse.ok(data=items)


@router.patch(
    "/user/{user_id}/seen",
    response_model=APIResponse[MarkSeenResponse],
    summary="Mark all notifications of a user as seen",
)
async def mark_all_seen(
    user_id: str,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[MarkSeenResponse]:
    ensure_self_or_admin(current, user_id)
    updated = await service.mark_all_seen(user_id)
    return APIResponse.ok(
        data=MarkSeenResponse(updated=updated),
        message=SuccessMessages.MARKED_SEEN,
    )


# ==============================================================================
# NOTIFICATION CRUD
# ==============================================================================

@router.get(
    "",
    response_model=APIResponse[List[NotificationResponse]],
    summary="List all notifications",
)
async def list_notifications(
    admin: AdminUser,
    service: NotificationServiceDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.MAX_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> APIResponse[List[NotificationResponse]]:
    items = await service.get_all(
        skip=skip,
        limit=limit,
        sort_by="timestamp",
        sort_order="desc",
    )
    return APIResponse.ok(data=items)


@router.post(
    "",
    response_model=APIResponse[NotificationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create notification",
)
async def create_notification(
    schema: NotificationCreate,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[NotificationResponse]:
    notification = await service.create(schema)
    return APIResponse.ok(data=notification, message=SuccessMessages.CREATED)


@router.get(
    "/{notification_id}",
    response_model=APIResponse[NotificationResponse],
    summary="Get notification by ID",
)
async def get_notification(
    notification_id: str,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[NotificationResponse]:
    notification = await service.get_by_id(notification_id)
    ensure_self_or_admin(current, notification.user_id)
    return APIResponse.ok(data=notification)


@router.put(
    "/{notification_id}",
    response_model=APIResponse[NotificationResponse],
    summary="Update notification",
)
async def update_notification(
    notification_id: str,
    schema: NotificationUpdate,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[NotificationResponse]:
    existing = await service.get_by_id(notification_id)
    ensure_self_or_admin(current, existing.user_id)
    notification = await service.update(notification_id, schema)
    return APIResponse.ok(data=notification, message=SuccessMessages.UPDATED)


@router.patch(
    "/{notification_id}/seen",
    response_model=APIResponse[NotificationResponse],
    summary="Mark notification as seen",
)
async def mark_seen(
    notification_id: str,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[NotificationResponse]:
    existing = await service.get_by_id(notification_id)
    ensure_self_or_admin(current, existing.user_id)
    return APIResponse.ok(data=await service.mark_seen(notification_id))


@router.delete(
    "/{notification_id}",
    response_model=APIResponse[dict],
    summary="Delete notification",
)
async def delete_notification(
    notification_id: str,
    current: CurrentUser,
    service: NotificationServiceDep,
) -> APIResponse[dict]:
    existing = await service.get_by_id(notification_id)
    ensure_self_or_admin(current, existing.user_id)
    await service.delete(notification_id)
    return APIResponse.ok(data=None, message=SuccessMessages.DELETED)
