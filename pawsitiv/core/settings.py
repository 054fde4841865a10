# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Supports: Development, Production and Testing environments
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List, TYPE_CHECKING

from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from pawsitiv.database.connection.config import ConnectionConfig


class DatabaseType(str, Enum):
    """
    Supported database backends.

    Attributes:
        SQLITE: File-based database for development/testing
        POSTGRESQL: Relational database via asyncpg
        MONGODB: Document database via motor
    """
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MONGODB = "mongodb"


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Pawsitiv backend settings.

    Every field can be overridden through an environment variable of the
    same name or a ``.env`` file in the working directory.

    Example:
        >>> from pawsitiv.core.settings import get_settings
        >>> get_settings().PORT
        3669
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="Pawsitiv",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (logs, stack traces)"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=3669, ge=1, le=65535, description="Bind port")

    # --------------------------------------------------------------------------
    # API CONFIGURATION
    # --------------------------------------------------------------------------
    API_PREFIX: str = Field(
        default="/api",
        description="REST route prefix"
    )
    API_TITLE: str = Field(
        default="Pawsitiv API",
        description="OpenAPI documentation title"
    )
    API_DESCRIPTION: str = Field(
        default="Street-cat community backend",
        description="OpenAPI documentation description"
    )

    # --------------------------------------------------------------------------
    # DATABASE TYPE SELECTION
    # --------------------------------------------------------------------------
    DATABASE_TYPE: DatabaseType = Field(
        default=DatabaseType.SQLITE,
        description="Active database backend (sqlite, postgresql, mongodb)"
    )

    # --------------------------------------------------------------------------
    # SQLITE CONFIGURATION
    # --------------------------------------------------------------------------
    SQLITE_URL: str = Field(
        default="sqlite:///./pawsitiv.db",
        description="SQLite database file path"
    )

    # --------------------------------------------------------------------------
    # POSTGRESQL CONFIGURATION
    # --------------------------------------------------------------------------
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432, ge=1, le=65535)
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="postgres")
    POSTGRES_DB: str = Field(default="pawsitiv")

    # --------------------------------------------------------------------------
    # MONGODB CONFIGURATION
    # --------------------------------------------------------------------------
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB: str = Field(
        default="pawsitiv",
        description="MongoDB database name"
    )

    # --------------------------------------------------------------------------
    # CONNECTION POOL SETTINGS
    # --------------------------------------------------------------------------
    DB_POOL_SIZE: int = Field(default=10, ge=1, le=100)
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0, le=100)
    DB_POOL_RECYCLE: int = Field(
        default=3600,
        ge=60,
        description="Connection recycle time in seconds"
    )

    # --------------------------------------------------------------------------
    # CONNECTION SUPERVISOR
    # --------------------------------------------------------------------------
    DB_CONNECTION_RETRIES: int = Field(
        default=10,
        ge=1,
        description="Total connection attempts before startup fails"
    )
    DB_CONNECTION_DELAY_MS: int = Field(
        default=5000,
        ge=0,
        description="Fixed wait between connection attempts (ms)"
    )
    DB_CONNECT_TIMEOUT_MS: int = Field(
        default=5000,
        ge=1,
        description="Per-attempt driver connect/server selection timeout (ms)"
    )
    DB_IDLE_TIMEOUT_MS: int = Field(
        default=45000,
        ge=1,
        description="Socket idle timeout (ms)"
    )

    # --------------------------------------------------------------------------
    # SESSION SETTINGS
    # --------------------------------------------------------------------------
    SESSION_SECRET: str = Field(
        default="pawsitiv-dev-session-secret-change-me",
        min_length=16,
        description="Signing key for the session cookie"
    )
    SESSION_COOKIE_NAME: str = Field(default="pawsitiv-session")
    SESSION_MAX_AGE: int = Field(
        default=60 * 60 * 24,
        ge=60,
        description="Session lifetime in seconds"
    )

    # --------------------------------------------------------------------------
    # RATE LIMITING (production only)
    # --------------------------------------------------------------------------
    RATE_LIMIT_ENABLED: bool = Field(default=True)
    RATE_LIMIT_REQUESTS: int = Field(
        default=100,
        ge=1,
        description="Maximum requests per window"
    )
    RATE_LIMIT_WINDOW: int = Field(
        default=15 * 60,
        ge=1,
        description="Rate limit window in seconds"
    )

    # --------------------------------------------------------------------------
    # CORS SETTINGS
    # --------------------------------------------------------------------------
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)

    # --------------------------------------------------------------------------
    # UPLOADS
    # --------------------------------------------------------------------------
    MAX_UPLOAD_SIZE: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Maximum accepted upload size in bytes"
    )
    IMAGE_MAX_DIMENSION: int = Field(default=1280, ge=64)
    IMAGE_QUALITY: int = Field(default=80, ge=1, le=95)

    # --------------------------------------------------------------------------
    # SEEDING
    # --------------------------------------------------------------------------
    SEED_DATABASE: bool = Field(
        default=False,
        description="Insert demo data on startup (development only)"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FORMAT: str = Field(
        default="text",
        description="Log format (json, text)"
    )

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def postgres_url(self) -> str:
        """Async PostgreSQL connection string with asyncpg driver."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @computed_field
    @property
    def postgres_sync_url(self) -> str:
        """Sync PostgreSQL URL for Alembic migrations."""
        return (
            f"postgresql://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @computed_field
    @property
    def sqlite_async_url(self) -> str:
        """SQLite URL rewritten for the aiosqlite driver."""
        return self.SQLITE_URL.replace("sqlite://", "sqlite+aiosqlite://")

    @computed_field
    @property
    def database_url(self) -> str:
        """
        Get the appropriate database URL based on DATABASE_TYPE.

        Returns:
            Async database connection URL for the selected database type

        Raises:
            ValueError: If DATABASE_TYPE is not supported
        """
        if self.DATABASE_TYPE == DatabaseType.SQLITE:
            return self.sqlite_async_url
        elif self.DATABASE_TYPE == DatabaseType.POSTGRESQL:
            return self.postgres_url
        elif self.DATABASE_TYPE == DatabaseType.MONGODB:
            return self.MONGODB_URL
        raise ValueError(f"Unsupported database type: {self.DATABASE_TYPE}")

    @computed_field
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    def connection_config(self) -> "ConnectionConfig":
        """
        Build the immutable connection config consumed by the supervisor.

        Returns:
            ConnectionConfig populated from the DB_* settings
        """
        from pawsitiv.database.connection.config import ConnectionConfig

        return ConnectionConfig(
            uri=self.database_url,
            database_type=self.DATABASE_TYPE.value,
            database_name=(
                self.MONGODB_DB
                if self.DATABASE_TYPE == DatabaseType.MONGODB
                else None
            ),
            max_retries=self.DB_CONNECTION_RETRIES,
            retry_delay_ms=self.DB_CONNECTION_DELAY_MS,
            connect_timeout_ms=self.DB_CONNECT_TIMEOUT_MS,
            idle_timeout_ms=self.DB_IDLE_TIMEOUT_MS,
            pool_size=self.DB_POOL_SIZE,
            max_overflow=self.DB_MAX_OVERFLOW,
            pool_recycle=self.DB_POOL_RECYCLE,
            echo=self.DEBUG,
        )

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """Warn when the development session secret is in use."""
        if v == "pawsitiv-dev-session-secret-change-me":
            import warnings
            warnings.warn(
                "Using default SESSION_SECRET. Set a secure value for production!",
                UserWarning
            )
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
