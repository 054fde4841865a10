# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Pydantic Schemas
================

Request/Response validation schemas for API endpoints:
- Base: Response envelope, health
- User: Registration, profile, login
- Cat: Cat profiles and image metadata
- Notification: Notification CRUD
- Poll: Polls and answers
"""

from pawsitiv.schemas.base import (
    BaseSchema,
    TimestampSchema,
    APIResponse,
    HealthResponse,
    DatabaseHealthResponse,
)
from pawsitiv.schemas.user import (
    UserRegister,
    UserCreate,
    UserUpdate,
    UserResponse,
    UserLogin,
)
from pawsitiv.schemas.cat import (
    CatAppearance,
    CatCreate,
    CatUpdate,
    CatResponse,
    CatImageResponse,
)
from pawsitiv.schemas.notification import (
    NotificationCreate,
    NotificationUpdate,
    NotificationResponse,
    MarkSeenResponse,
)
from pawsitiv.schemas.poll import (
    PollCreate,
    PollResponse,
    AnswerCreate,
    AnswerResponse,
)

__all__ = [
    "BaseSchema",
    "TimestampSchema",
    "APIResponse",
    "HealthResponse",
    "DatabaseHealthResponse",
    "UserRegister",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserLogin",
    "CatAppearance",
    "CatCreate",
    "CatUpdate",
    "CatResponse",
    "CatImageResponse",
    "NotificationCreate",
    "NotificationUpdate",
    "NotificationResponse",
    "MarkSeenResponse",
    "PollCreate",
    "PollResponse",
    "AnswerCreate",
    "AnswerResponse",
]
