# ==============================================================================
# REQUEST LOGGER MIDDLEWARE
# ==============================================================================
# Structured request/response logging
# ==============================================================================

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from pawsitiv.core.constants import APIConstants

logger = logging.getLogger(__name__)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Log method, path, status and duration of every request.

    Reuses an incoming ``X-Request-ID`` or generates one, and returns it
    together with ``X-Process-Time``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get(APIConstants.REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        start_time = time.perf_counter()

        logger.debug("[%s] %s %s - Started", request_id, request.method, request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "[%s] %s %s - Error (%.2fms): %s",
                request_id, request.method, request.url.path, duration_ms, e,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            "[%s] %s %s - %d (%.2fms)",
            request_id, request.method, request.url.path,
            response.status_code, duration_ms,
        )

        response.headers[APIConstants.REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"
        return response
