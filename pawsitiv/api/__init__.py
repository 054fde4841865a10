# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: session authentication, database access, services
- Routers: Users, Cats, Notifications, Polls
"""

from pawsitiv.api.router import api_router

__all__ = ["api_router"]
