"""
FastAPI Main Application
Entry point for the Storefront Content API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..cms import get_content_manager
from ..db.session import get_engine, init_db
from .config import get_settings
from .errors import setup_error_handlers
from .middleware import RequestLoggingMiddleware, XSSFilterMiddleware
from .routers import (
    content_router,
    health_router,
    images_router,
    static_router,
    stores_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates missing tables and the content manager on startup.
    """
    logger.info("Starting Storefront Content API...")

    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    engine = get_engine(settings.database_url, settings.db_pool_size, settings.db_max_overflow)
    init_db(engine)

    manager = get_content_manager()
    logger.info(f"Storefront Content API started with {manager.backend_name} storage")

    yield

    logger.info("Shutting down Storefront Content API...")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description=settings.description,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if settings.enable_xss_filter:
        app.add_middleware(XSSFilterMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    setup_error_handlers(app)

    app.include_router(health_router)
    app.include_router(stores_router)
    app.include_router(content_router)
    app.include_router(images_router)
    app.include_router(static_router)

    @app.get("/")
    async def root():
        """API information."""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "description": settings.description,
            "endpoints": {
                "health": "/health",
                "status": "/status",
                "docs": "/docs",
                "static": "/static/files",
            },
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "storefront.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
