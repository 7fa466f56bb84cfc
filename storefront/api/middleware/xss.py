"""
XSS Filter Middleware
Strips script injection patterns from query string values.
"""

import logging
import re
from typing import Callable
from urllib.parse import parse_qsl, urlencode

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

_PATTERNS = [
    re.compile(r"<script[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"</?script[^>]*>", re.IGNORECASE),
    re.compile(r"src\s*=\s*['\"][^'\"]*['\"]", re.IGNORECASE),
    re.compile(r"eval\((.*?)\)", re.IGNORECASE | re.DOTALL),
    re.compile(r"expression\((.*?)\)", re.IGNORECASE | re.DOTALL),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
]


def strip_xss(value: str) -> str:
    """Remove script patterns and angle brackets from a value."""
    cleaned = value
    for pattern in _PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned.replace("<", "").replace(">", "")


class XSSFilterMiddleware(BaseHTTPMiddleware):
    """
    Rewrites the query string with sanitized values before routing.

    Request bodies are left untouched; uploads are binary.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        raw = request.scope.get("query_string", b"")
        if raw:
            params = parse_qsl(raw.decode("latin-1"), keep_blank_values=True)
            cleaned = [(strip_xss(k), strip_xss(v)) for k, v in params]
            if cleaned != params:
                logger.warning(
                    "Stripped XSS patterns from query string",
                    extra={"path": request.url.path},
                )
                request.scope["query_string"] = urlencode(cleaned).encode("latin-1")

        return await call_next(request)
