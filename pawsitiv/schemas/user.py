# ==============================================================================
# USER SCHEMAS - Registration, Profile, Login
# ==============================================================================
# Request/Response schemas for user management
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from pawsitiv.core.constants import SecurityConstants
from pawsitiv.schemas.base import BaseSchema, TimestampSchema

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class UserRegister(BaseSchema):
    """Schema for self-service registration."""

    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        pattern=USERNAME_PATTERN,
        examples=["cloudstrife"],
    )
    email: EmailStr = Field(..., examples=["cloud.strife@example.com"])
    password: str = Field(
        ...,
        min_length=SecurityConstants.MIN_PASSWORD_LENGTH,
        max_length=SecurityConstants.MAX_PASSWORD_LENGTH,
    )
    profile_picture: Optional[str] = Field(None, max_length=500)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return v.lower()


class UserCreate(UserRegister):
    """Schema for creating a user through the admin CRUD endpoint."""

    is_admin: bool = False


class UserUpdate(BaseSchema):
    """Partial user update."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    username: Optional[str] = Field(
        None,
        min_length=3,
        max_length=50,
        pattern=USERNAME_PATTERN,
    )
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(
        None,
        min_length=SecurityConstants.MIN_PASSWORD_LENGTH,
        max_length=SecurityConstants.MAX_PASSWORD_LENGTH,
    )
    profile_picture: Optional[str] = Field(None, max_length=500)
    is_admin: Optional[bool] = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class UserResponse(TimestampSchema):
    """Public user profile. The password hash is never included."""

    id: str
    name: str
    username: str
    email: EmailStr
    profile_picture: Optional[str] = None
    is_admin: bool = False
    subscribed_cats: List[str] = Field(default_factory=list)


class UserLogin(BaseSchema):
    """Schema for user login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)
