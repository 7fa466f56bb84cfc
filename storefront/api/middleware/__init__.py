"""
Middleware
Custom middleware for FastAPI application.
"""

from .logging import RequestLoggingMiddleware
from .xss import XSSFilterMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "XSSFilterMiddleware",
]
