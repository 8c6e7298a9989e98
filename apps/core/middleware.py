"""
HTTP middleware for the EMI Calculator service.

RequestLoggingMiddleware writes one log line per request with its
status and duration. CORS headers come from django-cors-headers.
"""

import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Middleware that logs method, path, status code and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.perf_counter()
        response = self.get_response(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "%s %s -> %d (%.2f ms)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
        )
        return response
