# ==============================================================================
# MAIN APPLICATION - FastAPI Entry Point
# ==============================================================================
# Application factory with lifespan events, middleware, and routing
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from pawsitiv.api.router import api_router
from pawsitiv.core.exceptions import AppException, ValidationError
from pawsitiv.core.logging import setup_logging
from pawsitiv.core.settings import settings
from pawsitiv.database.factory import DatabaseFactory
from pawsitiv.middleware import RateLimitMiddleware, RequestLoggerMiddleware
from pawsitiv.schemas.base import DatabaseHealthResponse, HealthResponse

logger = logging.getLogger(__name__)


# ==============================================================================
# LIFESPAN MANAGEMENT
# ==============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Startup connects through the connection supervisor; if every attempt
    fails, ConnectionExhaustedError propagates and the server does not
    start. Shutdown closes the connection and cancels pending retries.
    """
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
    logger.info("Environment: %s", settings.ENVIRONMENT.value)
    logger.info("Database: %s", settings.DATABASE_TYPE.value)

    adapter = await DatabaseFactory.initialize()

    if settings.SEED_DATABASE and settings.is_development:
        from pawsitiv.seed import seed_database
        await seed_database(adapter)

    yield

    logger.info("Shutting down application...")
    await DatabaseFactory.shutdown()
    logger.info("Application shutdown complete")


# ==============================================================================
# APPLICATION FACTORY
# ==============================================================================

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )

    # Middleware runs outermost-last: CORS wraps everything
    if settings.is_production and settings.RATE_LIMIT_ENABLED:
        app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggerMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)
    register_health_endpoints(app)

    return app


# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================

def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %r", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(exc.to_dict()),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        error = ValidationError(
            message="Request validation failed",
            errors={"body": jsonable_encoder(exc.errors())},
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception("Unexpected error: %s", exc)

        detail = str(exc) if settings.is_development else "An unexpected error occurred"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": detail,
                },
            },
        )


# ==============================================================================
# HEALTH ENDPOINTS
# ==============================================================================

def register_health_endpoints(app: FastAPI) -> None:
    """Register health check endpoints."""

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        report = await DatabaseFactory.health_check()
        healthy = report["healthy"]

        return HealthResponse(
            status="healthy" if healthy else "degraded",
            version=settings.APP_VERSION,
            database="connected" if healthy else report.get("status", "disconnected"),
            environment=settings.ENVIRONMENT.value,
        )

    @app.get(
        "/health/db",
        response_model=DatabaseHealthResponse,
        tags=["Health"],
        summary="Database connection status",
        description="Supervisor state, retry progress and pool statistics.",
    )
    async def database_health() -> JSONResponse:
        report = DatabaseHealthResponse.model_validate(await DatabaseFactory.health_check())
        return JSONResponse(
            status_code=status.HTTP_200_OK if report.healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=jsonable_encoder(report),
        )

    @app.get(
        "/",
        tags=["Health"],
        summary="Root endpoint",
    )
    async def root() -> dict:
        return {
            "message": f"Welcome to the {settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "docs": None if settings.is_production else "/docs",
            "health": "/health",
        }


# Create application instance
app = create_app()


# ==============================================================================
# DEVELOPMENT RUNNER
# ==============================================================================

def run() -> None:
    import uvicorn

    uvicorn.run(
        "pawsitiv.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development and settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
