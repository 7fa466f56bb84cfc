"""
Health Check Endpoints
Endpoints for health checks and status monitoring.
"""

import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from ...cms import ContentAssetsManager
from ..config import APISettings, get_settings
from ..dependencies import get_cms, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check.

    Returns:
        Simple health status
    """
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}


@router.get("/status", status_code=status.HTTP_200_OK)
def status_check(
    settings: APISettings = Depends(get_settings),
    db: Session = Depends(get_db),
    manager: ContentAssetsManager = Depends(get_cms),
) -> Dict[str, Any]:
    """
    Detailed status check.

    Checks the database connection and the content storage backend.
    """
    status_info = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": settings.version,
        "components": {},
    }

    try:
        db.execute(text("SELECT 1"))
        status_info["components"]["database"] = {
            "status": "healthy",
            "url": settings.database_url.split("@")[-1],  # Hide credentials
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        status_info["components"]["database"] = {"status": "unhealthy", "error": str(e)}
        status_info["status"] = "degraded"

    try:
        storage_healthy = manager.ping()
        status_info["components"]["storage"] = {
            "status": "healthy" if storage_healthy else "unhealthy",
            "backend": manager.backend_name,
        }
        if not storage_healthy:
            status_info["status"] = "degraded"
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        status_info["components"]["storage"] = {"status": "unhealthy", "error": str(e)}
        status_info["status"] = "degraded"

    return status_info
