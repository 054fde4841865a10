# ==============================================================================
# RATE LIMITER MIDDLEWARE
# ==============================================================================
# Fixed-window request counting per client IP
# ==============================================================================

from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from pawsitiv.core.constants import APIConstants, ErrorMessages
from pawsitiv.core.exceptions import RateLimitError
from pawsitiv.core.settings import settings

EXEMPT_PATHS = frozenset({"/", "/health", "/health/db"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Limit each client IP to ``requests_limit`` requests per window.

    The window starts with a client's first request and resets after
    ``window_seconds``. Installed only in production.

    Attributes:
        requests_limit: Maximum requests per window
        window_seconds: Window length in seconds
        _windows: client id -> (window start, request count)
    """

    def __init__(
        self,
        app,
        requests_limit: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ):
        super().__init__(app)
        self.requests_limit = requests_limit or settings.RATE_LIMIT_REQUESTS
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW
        self._windows: Dict[str, Tuple[float, int]] = {}

    def _get_client_id(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"

    def _hit(self, client_id: str, now: float) -> Tuple[bool, int, int]:
        """
        Count a request.

        Returns:
            Tuple of (allowed, remaining, seconds until reset)
        """
        started, count = self._windows.get(client_id, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        reset = max(1, int(self.window_seconds - (now - started)))
        if count >= self.requests_limit:
            return False, 0, reset

        count += 1
        self._windows[client_id] = (started, count)
        return True, self.requests_limit - count, reset

    def _prune(self, now: float) -> None:
        expired = [
            client for client, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for client in expired:
            del self._windows[client]

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        now = time.monotonic()
        if len(self._windows) > 10_000:
            self._prune(now)

        allowed, remaining, reset = self._hit(self._get_client_id(request), now)
        headers = {
            APIConstants.RATE_LIMIT_HEADER: str(self.requests_limit),
            APIConstants.RATE_LIMIT_REMAINING_HEADER: str(remaining),
            APIConstants.RATE_LIMIT_RESET_HEADER: str(reset),
        }

        if not allowed:
            error = RateLimitError(
                message=ErrorMessages.RATE_LIMIT_EXCEEDED,
                retry_after=reset,
            )
            return JSONResponse(
                status_code=error.status_code,
                content=error.to_dict(),
                headers={**headers, "Retry-After": str(reset)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
