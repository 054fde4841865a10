# ==============================================================================
# NOTIFICATION MODEL - Per-User Cat Notifications
# ==============================================================================

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from pawsitiv.domain_models.base import SQLBase, TimestampMixin, utcnow


class Notification(SQLBase, TimestampMixin):
    """
    Notification about a cat for one user.

    Attributes:
        user_id: Recipient
        cat_id: Cat the notification is about
        type: One of ``NotificationTypes``
        timestamp: When the event happened
        seen: Whether the user has read it
    """

    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    cat_id: Mapped[str] = mapped_column(
        ForeignKey("cats.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    seen: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
