# ==============================================================================
# USERS ENDPOINTS - Accounts, Session Login & Subscriptions
# ==============================================================================
# Registration, cookie-session login/logout, profile CRUD and cat follows
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Request, status

from pawsitiv.api.dependencies import (
    AdminUser,
    CatServiceDep,
    CurrentUser,
    UserServiceDep,
    ensure_self_or_admin,
)
from pawsitiv.core.constants import APIConstants, ErrorMessages, SuccessMessages
from pawsitiv.core.exceptions import AuthorizationError
from pawsitiv.core.security import login_session, logout_session
from pawsitiv.schemas.base import APIResponse
from pawsitiv.schemas.cat import CatResponse
from pawsitiv.schemas.user import (
    UserCreate,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["Users"])


# ==============================================================================
# SESSION ENDPOINTS
# ==============================================================================

@router.post(
    "/register",
    response_model=APIResponse[dict],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an account and log in with a session cookie.",
)
async def register(
    request: Request,
    schema: UserRegister,
    service: UserServiceDep,
) -> APIResponse[dict]:
    user = await service.register(schema)
    login_session(request.session, user.id)
    return APIResponse.ok(
        data={"user": user.model_dump(mode="json")},
        message=SuccessMessages.USER_REGISTERED,
    )


@router.post(
    "/login",
    response_model=APIResponse[dict],
    summary="User login",
    description="Check email and password and start a cookie session.",
)
async def login(
    request: Request,
    credentials: UserLogin,
    service: UserServiceDep,
) -> APIResponse[dict]:
    user = await service.authenticate(
        email=credentials.email,
        password=credentials.password,
    )
    login_session(request.session, user.id)
    return APIResponse.ok(
        data={"user": user.model_dump(mode="json")},
        message=SuccessMessages.LOGIN_SUCCESS,
    )


@router.post(
    "/logout",
    response_model=APIResponse[dict],
    summary="User logout",
)
async def logout(request: Request) -> APIResponse[dict]:
    """Clear the session. Succeeds for anonymous sessions too."""
    logout_session(request.session)
    return APIResponse.ok(data=None, message=SuccessMessages.LOGOUT_SUCCESS)


@router.get(
    "/me",
    response_model=APIResponse[UserResponse],
    summary="Get current user",
)
async def get_me(user: CurrentUser) -> APIResponse[UserResponse]:
    return APIResponse.ok(data=user)


# ==============================================================================
# USER CRUD
# ==============================================================================

@router.get(
    "",
    response_model=APIResponse[List[UserResponse]],
    summary="List users",
)
async def list_users(
    service: UserServiceDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(APIConstants.DEFAULT_PAGE_SIZE * 10, ge=1, le=APIConstants.MAX_PAGE_SIZE),
) -> APIResponse[List[UserResponse]]:
    users = await service.get_all(skip=skip, limit=limit, sort_by="created_at")
    return APIResponse.ok(data=users)


@router.post(
    "",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Admin-only account creation; may grant admin rights.",
)
async def create_user(
    schema: UserCreate,
    admin: AdminUser,
    service: UserServiceDep,
) -> APIResponse[UserResponse]:
    user = await service.create(schema)
    return APIResponse.ok(data=user, message=SuccessMessages.CREATED)


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Get user by ID",
)
async def get_user(
    user_id: str,
    service: UserServiceDep,
) -> APIResponse[UserResponse]:
    return APIResponse.ok(data=await service.get_by_id(user_id))


@router.put(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Update user",
    description="Users may edit themselves; admins may edit anyone.",
)
async def update_user(
    user_id: str,
    schema: UserUpdate,
    current: CurrentUser,
    service: UserServiceDep,
) -> APIResponse[UserResponse]:
    ensure_self_or_admin(current, user_id)
    if schema.is_admin is not None and not current.is_admin:
        raise AuthorizationError(
            message=ErrorMessages.PERMISSION_DENIED,
            required_permission="admin",
        )
    user = await service.update(user_id, schema)
    return APIResponse.ok(data=user, message=SuccessMessages.UPDATED)


@router.delete(
    "/{user_id}",
    response_model=APIResponse[dict],
    summary="Delete user",
)
async def delete_user(
    request: Request,
    user_id: str,
    current: CurrentUser,
    service: UserServiceDep,
) -> APIResponse[dict]:
    ensure_self_or_admin(current, user_id)
    await service.delete(user_id)
    if current.id == user_id:
        logout_session(request.session)
    return APIResponse.ok(data=None, message=SuccessMessages.DELETED)


# ==============================================================================
# SUBSCRIPTIONS
# ==============================================================================

@router.get(
    "/{user_id}/subscriptions",
    response_model=APIResponse[List[CatResponse]],
    summary="List followed cats",
)
async def list_subscriptions(
    user_id: str,
    service: UserServiceDep,
    cats: CatServiceDep,
) -> APIResponse[List[CatResponse]]:
    """Cats that no longer exist are skipped."""
    result = []
    for cat_id in await service.get_subscribed_cat_ids(user_id):
        if await cats.exists(cat_id):
            result.append(await cats.get_by_id(cat_id))
    return APIResponse.ok(data=result)


@router.post(
    "/{user_id}/subscriptions/{cat_id}",
    response_model=APIResponse[UserResponse],
    summary="Follow a cat",
)
async def subscribe(
    user_id: str,
    cat_id: str,
    current: CurrentUser,
    service: UserServiceDep,
) -> APIResponse[UserResponse]:
    ensure_self_or_admin(current, user_id)
    user = await service.subscribe(user_id, cat_id)
    return APIResponse.ok(data=user, message=SuccessMessages.SUBSCRIBED)


@router.delete(
    "/{user_id}/subscriptions/{cat_id}",
    response_model=APIResponse[UserResponse],
    summary="Unfollow a cat",
)
async def unsubscribe(
    user_id: str,
    cat_id: str,
    current: CurrentUser,
    service: UserServiceDep,
) -> APIResponse[UserResponse]:
    ensure_self_or_admin(current, user_id)
    user = await service.unsubscribe(user_id, cat_id)
    return APIResponse.ok(data=user, message=SuccessMessages.UNSUBSCRIBED)
