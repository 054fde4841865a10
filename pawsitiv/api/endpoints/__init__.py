# ==============================================================================
# API ENDPOINTS PACKAGE
# ==============================================================================

"""
API Endpoints
=============

Route modules mounted under ``API_PREFIX``.
"""

from pawsitiv.api.endpoints.users import router as users_router
from pawsitiv.api.endpoints.cats import router as cats_router
from pawsitiv.api.endpoints.notifications import router as notifications_router
from pawsitiv.api.endpoints.polls import router as polls_router

__all__ = [
    "users_router",
    "cats_router",
    "notifications_router",
    "polls_router",
]
