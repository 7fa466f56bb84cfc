"""
API Routers
FastAPI route handlers for different endpoints.
"""

from .content import router as content_router
from .health import router as health_router
from .images import router as images_router
from .static import router as static_router
from .stores import router as stores_router

__all__ = [
    "health_router",
    "stores_router",
    "content_router",
    "images_router",
    "static_router",
]
