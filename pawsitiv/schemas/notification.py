# ==============================================================================
# NOTIFICATION SCHEMAS
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from pawsitiv.schemas.base import BaseSchema, TimestampSchema

NotificationType = Literal["neue_katze", "update_katze", "match", "nachricht"]


class NotificationCreate(BaseSchema):
    user_id: str = Field(..., min_length=1)
    cat_id: str = Field(..., min_length=1)
    type: NotificationType
    timestamp: Optional[datetime] = None
    seen: bool = False


class NotificationUpdate(BaseSchema):
    type: Optional[NotificationType] = None
    seen: Optional[bool] = None


class NotificationResponse(TimestampSchema):
    id: str
    user_id: str
    cat_id: str
    type: NotificationType
    timestamp: datetime
    seen: bool = False


class MarkSeenResponse(BaseSchema):
    updated: int = Field(..., ge=0, description="Notifications changed to seen")
