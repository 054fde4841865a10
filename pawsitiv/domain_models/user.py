# ==============================================================================
# USER MODEL - Community Members
# ==============================================================================

from __future__ import annotations

from typing import List

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from pawsitiv.core.constants import CatConstants
from pawsitiv.domain_models.base import SQLBase, TimestampMixin


class User(SQLBase, TimestampMixin):
    """
    Registered community member.

    Attributes:
        name: Display name
        username: Unique login name
        email: Unique email address
        password: Bcrypt hash, never returned by the API
        profile_picture: Path or URL of the avatar
        is_admin: Admin privileges flag
        subscribed_cats: Ids of cats the user follows
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    profile_picture: Mapped[str] = mapped_column(
        String(500),
        default=CatConstants.DEFAULT_PROFILE_PICTURE,
        nullable=False,
    )
    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    subscribed_cats: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
