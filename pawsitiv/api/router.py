# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all endpoint routers under the API prefix
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from pawsitiv.api.endpoints import (
    cats_router,
    notifications_router,
    polls_router,
    users_router,
)
from pawsitiv.core.settings import settings

api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(users_router)
api_router.include_router(cats_router)
api_router.include_router(notifications_router)
api_router.include_router(polls_router)
