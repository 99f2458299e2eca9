import logging
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import settings

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = "default-src 'self'; frame-ancestors 'self'"

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware adding browser security headers to every response.
    The content security policy is left off the documentation pages,
    which load their assets from a CDN.
    """

    def __init__(self, app):
        super().__init__(app)
        logger.info("Security headers middleware initialized")

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Process the request and decorate the response.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler

        Returns:
            Response object
        """
        response = await call_next(request)

        if not settings.SECURITY_HEADERS_ENABLED:
            return response

        response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")

        if not self._is_documentation_path(request.url.path):
            response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)

        return response

    def _is_documentation_path(self, path: str) -> bool:
        skip_paths = [
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

        for skip_path in skip_paths:
            if path.startswith(skip_path):
                return True

        return False
