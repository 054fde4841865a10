# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for session authentication and database access
# ==============================================================================

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from pawsitiv.core.constants import ErrorMessages
from pawsitiv.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from pawsitiv.core.security import logout_session, session_user_id
from pawsitiv.core.settings import Settings, get_settings
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.database.factory import DatabaseFactory
from pawsitiv.schemas.user import UserResponse
from pawsitiv.services.cat_service import CatService
from pawsitiv.services.notification_service import NotificationService
from pawsitiv.services.poll_service import PollService
from pawsitiv.services.user_service import UserService


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_adapter() -> BaseDatabaseAdapter:
    """
    Get database adapter dependency.

    Raises ServiceUnavailableError while the supervisor has no adapter.
    """
    return DatabaseFactory.get_adapter()


DatabaseDep = Annotated[BaseDatabaseAdapter, Depends(get_adapter)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_user_service(adapter: DatabaseDep) -> UserService:
    return UserService(adapter)


async def get_cat_service(adapter: DatabaseDep, settings: SettingsDep) -> CatService:
    return CatService(adapter, settings)


async def get_notification_service(adapter: DatabaseDep) -> NotificationService:
    return NotificationService(adapter)


async def get_poll_service(adapter: DatabaseDep) -> PollService:
    return PollService(adapter)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CatServiceDep = Annotated[CatService, Depends(get_cat_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
PollServiceDep = Annotated[PollService, Depends(get_poll_service)]


# ==============================================================================
# SESSION AUTHENTICATION
# ==============================================================================

async def get_current_user_id(request: Request) -> str:
    """
    User id stored in the signed session cookie.

    Raises:
        AuthenticationError: If the session is anonymous
    """
    user_id = session_user_id(request.session)
    if not user_id:
        raise AuthenticationError(message=ErrorMessages.UNAUTHORIZED)
    return user_id


async def get_current_user(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: UserServiceDep,
) -> UserResponse:
    """
    Load the logged-in user.

    A session pointing at a deleted account is cleared and treated as
    anonymous.
    """
    try:
        return await service.get_by_id(user_id)
    except NotFoundError:
        logout_session(request.session)
        raise AuthenticationError(message=ErrorMessages.UNAUTHORIZED)


CurrentUserID = Annotated[str, Depends(get_current_user_id)]
CurrentUser = Annotated[UserResponse, Depends(get_current_user)]


async def get_admin_user(user: CurrentUser) -> UserResponse:
    if not user.is_admin:
        raise AuthorizationError(message=ErrorMessages.PERMISSION_DENIED)
    return user


AdminUser = Annotated[UserResponse, Depends(get_admin_user)]


def ensure_self_or_admin(user: UserResponse, user_id: str) -> None:
    """
    Raises:
        AuthorizationError: If ``user`` is neither ``user_id`` nor an admin
    """
    if user.id != user_id and not user.is_admin:
        raise AuthorizationError(message=ErrorMessages.PERMISSION_DENIED)
