# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Security, Exceptions, Constants, Logging
# ==============================================================================

"""
Core Module
===========

- settings: Environment configuration management
- security: Password hashing
- exceptions: Custom exception classes
- constants: Application-wide constants
- logging: Root logger configuration
"""

from pawsitiv.core.settings import settings, get_settings, DatabaseType
from pawsitiv.core.exceptions import (
    AppException,
    DatabaseError,
    ConnectionExhaustedError,
    ConnectionClosedError,
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    RateLimitError,
)

__all__ = [
    "settings",
    "get_settings",
    "DatabaseType",
    "AppException",
    "DatabaseError",
    "ConnectionExhaustedError",
    "ConnectionClosedError",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitError",
]
