"""
RecipeBox Logging Middleware
Structured logging with request/response tracking
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any, Optional
from contextvars import ContextVar

from core.dependencies import get_token_codec
from services.auth_service import InvalidTokenError

logger = structlog.get_logger()

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging middleware that provides:
    - Request/response logging with unique IDs
    - Masking of credential headers
    - The requesting username when a valid token is sent

    Request bodies are never logged; they carry passwords.
    """

    def __init__(self, app):
        super().__init__(app)

        # Paths to exclude from detailed logging
        self.exclude_paths = {"/health", "/favicon.ico"}

        # Sensitive headers to mask in logs
        self.sensitive_headers = {"authorization", "cookie"}

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        request_info = self._extract_request_info(request, request_id)
        logger.info("Request started", **request_info, event_type="request_start")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                **request_info,
                process_time=round(time.time() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise

        logger.log(
            self._determine_log_level(response.status_code),
            "Request completed",
            **request_info,
            status_code=response.status_code,
            process_time=round(time.time() - start_time, 4),
            event_type="request_complete"
        )

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_request_info(self, request: Request, request_id: str) -> Dict[str, Any]:
        info = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent", ""),
            "headers": self._filter_headers(dict(request.headers)),
        }

        username = self._extract_username(request)
        if username:
            info["username"] = username
            structlog.contextvars.bind_contextvars(username=username)

        return info

    def _extract_username(self, request: Request) -> Optional[str]:
        """Username from a valid bearer token; guards still do the real check"""
        auth_header = request.headers.get("authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return None

        try:
            return get_token_codec().verify(auth_header.split(" ", 1)[1]).username
        except InvalidTokenError:
            return None

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded

        return request.client.host if request.client else "unknown"

    def _filter_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Filter sensitive headers from logs"""
        filtered = {}
        for key, value in headers.items():
            if key.lower() in self.sensitive_headers:
                filtered[key] = "***MASKED***"
            else:
                filtered[key] = value
        return filtered

    def _determine_log_level(self, status_code: int) -> int:
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        return 20  # INFO


def get_request_id() -> str:
    """Get current request ID from context"""
    return request_id_var.get()
