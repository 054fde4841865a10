# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# ==============================================================================

from __future__ import annotations

from typing import Final


# ==============================================================================
# API CONSTANTS
# ==============================================================================

class APIConstants:
    """API-related constants."""

    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 100

    RATE_LIMIT_HEADER: Final[str] = "X-RateLimit-Limit"
    RATE_LIMIT_REMAINING_HEADER: Final[str] = "X-RateLimit-Remaining"
    RATE_LIMIT_RESET_HEADER: Final[str] = "X-RateLimit-Reset"
    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Collection/table names and query limits."""

    USERS_COLLECTION: Final[str] = "users"
    CATS_COLLECTION: Final[str] = "cats"
    CAT_IMAGES_COLLECTION: Final[str] = "cat_images"
    NOTIFICATIONS_COLLECTION: Final[str] = "notifications"
    POLLS_COLLECTION: Final[str] = "polls"
    ANSWERS_COLLECTION: Final[str] = "answers"

    MAX_BATCH_SIZE: Final[int] = 1000


# ==============================================================================
# CONNECTION EVENTS
# ==============================================================================

class ConnectionEvents:
    """Lifecycle events raised by database drivers."""

    CONNECTED: Final[str] = "connected"
    DISCONNECTED: Final[str] = "disconnected"
    ERROR: Final[str] = "error"
    RECONNECTED: Final[str] = "reconnected"

    @classmethod
    def all_events(cls) -> list[str]:
        return [cls.CONNECTED, cls.DISCONNECTED, cls.ERROR, cls.RECONNECTED]


# ==============================================================================
# SECURITY CONSTANTS
# ==============================================================================

class SecurityConstants:
    """Security-related constants."""

    MIN_PASSWORD_LENGTH: Final[int] = 6
    MAX_PASSWORD_LENGTH: Final[int] = 128

    SESSION_USER_KEY: Final[str] = "user_id"


# ==============================================================================
# DOMAIN CONSTANTS
# ==============================================================================

class CatConstants:
    """Cat and profile defaults."""

    DEFAULT_PROFILE_PICTURE: Final[str] = "/twice-stan.jpg"


class NotificationTypes:
    """Notification type constants."""

    NEW_CAT: Final[str] = "neue_katze"
    CAT_UPDATE: Final[str] = "update_katze"
    MATCH: Final[str] = "match"
    MESSAGE: Final[str] = "nachricht"

    @classmethod
    def all_types(cls) -> list[str]:
        """Get all valid notification types."""
        return [cls.NEW_CAT, cls.CAT_UPDATE, cls.MATCH, cls.MESSAGE]


class UploadConstants:
    """Accepted image uploads."""

    IMAGE_EXTENSIONS: Final[frozenset] = frozenset(
        {".jpeg", ".jpg", ".png", ".gif", ".webp"}
    )


# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

class ErrorMessages:
    """Standardized error messages."""

    INVALID_CREDENTIALS: Final[str] = "Invalid username or password"
    UNAUTHORIZED: Final[str] = "Authentication required"
    PERMISSION_DENIED: Final[str] = "You don't have permission to perform this action"

    USER_NOT_FOUND: Final[str] = "User not found"
    CAT_NOT_FOUND: Final[str] = "Cat not found"
    CAT_IMAGE_NOT_FOUND: Final[str] = "Cat image not found"
    NOTIFICATION_NOT_FOUND: Final[str] = "Notification not found"
    POLL_NOT_FOUND: Final[str] = "Poll not found"

    EMPTY_UPLOAD: Final[str] = "No file uploaded"
    INVALID_IMAGE: Final[str] = "Uploaded file is not a valid image"
    IMAGE_TOO_MANY_PIXELS: Final[str] = "Image dimensions are too large"

    RATE_LIMIT_EXCEEDED: Final[str] = "Too many requests from this IP, please try again later."


# ==============================================================================
# SUCCESS MESSAGES
# ==============================================================================

class SuccessMessages:
    """Standardized success messages."""

    CREATED: Final[str] = "Resource created successfully"
    UPDATED: Final[str] = "Resource updated successfully"
    DELETED: Final[str] = "Resource deleted successfully"

    LOGIN_SUCCESS: Final[str] = "Login successful"
    LOGOUT_SUCCESS: Final[str] = "Logout successful"
    USER_REGISTERED: Final[str] = "User registered successfully"

    SUBSCRIBED: Final[str] = "Subscribed to cat"
    UNSUBSCRIBED: Final[str] = "Unsubscribed from cat"
    MARKED_SEEN: Final[str] = "Notifications marked as seen"
