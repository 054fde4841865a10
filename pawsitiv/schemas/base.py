# ==============================================================================
# BASE SCHEMAS - Common Schema Patterns
# ==============================================================================
# Foundation schemas for API responses and health reports
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


# Type variable for generic response types
T = TypeVar("T")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    ``from_attributes`` lets the same schema validate ORM rows (SQL
    backends) and plain dicts (MongoDB).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )


class TimestampSchema(BaseSchema):
    """Schema with automatic timestamp fields."""

    created_at: Optional[datetime] = Field(
        None,
        description="Record creation timestamp"
    )
    updated_at: Optional[datetime] = Field(
        None,
        description="Last update timestamp"
    )


class APIResponse(BaseModel, Generic[T]):
    """
    Standard API response wrapper.

    Attributes:
        success: Whether the request was successful
        message: Optional status message
        data: Response payload
    """

    success: bool = Field(
        True,
        description="Whether the request was successful"
    )
    message: Optional[str] = Field(
        None,
        description="Status message"
    )
    data: Optional[T] = Field(
        None,
        description="Response data"
    )

    @classmethod
    def ok(
        cls,
        data: T,
        message: Optional[str] = None,
    ) -> "APIResponse[T]":
        """Create a successful response."""
        return cls(success=True, data=data, message=message)


class HealthResponse(BaseSchema):
    """Health check response schema."""

    status: str = Field(..., description="healthy or degraded")
    version: str = Field(..., description="Application version")
    database: str = Field(..., description="Database connection status")
    environment: str = Field(..., description="Deployment environment")


class DatabaseHealthResponse(BaseSchema):
    """Detailed database health, including the supervisor state."""

    healthy: bool
    status: str
    database_type: Optional[str] = None
    is_connecting: bool = False
    current_attempt: int = 0
    max_retries: Optional[int] = None
    retry_pending: bool = False
    pool: Optional[Dict[str, Any]] = None
