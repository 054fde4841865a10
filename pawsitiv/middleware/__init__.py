# ==============================================================================
# MIDDLEWARE PACKAGE INITIALIZATION
# ==============================================================================

"""
Middleware Module
=================

- Request logging
- Rate limiting (production only)
"""

from pawsitiv.middleware.rate_limiter import RateLimitMiddleware
from pawsitiv.middleware.request_logger import RequestLoggerMiddleware

__all__ = [
    "RateLimitMiddleware",
    "RequestLoggerMiddleware",
]
