"""
RecipeBox Middleware
Custom middleware for security headers and request logging
"""

from .security import SecurityMiddleware
from .logging import LoggingMiddleware, get_request_id

__all__ = [
    "SecurityMiddleware",
    "LoggingMiddleware",
    "get_request_id",
]
