"""
RecipeBox Security Middleware
Security headers and response timing
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import time


class SecurityMiddleware(BaseHTTPMiddleware):
    """Adds security headers and X-Process-Time to every response"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        self._add_security_headers(response, request)
        response.headers["X-Process-Time"] = str(round(time.time() - start_time, 4))
        return response

    def _add_security_headers(self, response: Response, request: Request):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-Permitted-Cross-Domain-Policies"] = "none"

        # HSTS (only for HTTPS)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        # Account data must not sit in shared caches
        if request.url.path.startswith("/users") or request.url.path.startswith("/auth"):
            response.headers["Cache-Control"] = "no-store"
