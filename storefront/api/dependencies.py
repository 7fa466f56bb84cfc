"""
Dependency Injection
FastAPI dependencies for database, services, and configurations.
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ..cms import ContentAssetsManager, get_content_manager
from ..config.settings import CMSSettings, get_cms_settings
from ..db.session import get_engine, get_session_factory
from ..services import ContentService, MerchantStoreService
from .config import APISettings, get_settings

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    Get database session.

    Use as FastAPI dependency:
        @app.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    settings = get_settings()
    engine = get_engine(settings.database_url, settings.db_pool_size, settings.db_max_overflow)
    SessionLocal = get_session_factory(engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_cms() -> ContentAssetsManager:
    """Get the configured content manager."""
    return get_content_manager()


def get_store_service(
    db: Session = Depends(get_db), manager: ContentAssetsManager = Depends(get_cms)
) -> MerchantStoreService:
    return MerchantStoreService(db, content_manager=manager)


def get_content_service(
    stores: MerchantStoreService = Depends(get_store_service),
    manager: ContentAssetsManager = Depends(get_cms),
    cms_settings: CMSSettings = Depends(get_cms_settings),
) -> ContentService:
    """
    Get content service instance.

    Use as FastAPI dependency:
        @app.get("/endpoint")
        def endpoint(service: ContentService = Depends(get_content_service)):
            ...
    """
    return ContentService(
        store_service=stores,
        content_manager=manager,
        max_file_size=cms_settings.max_file_size,
        static_base_url=cms_settings.static_base_url,
    )


def verify_api_key(
    settings: APISettings = Depends(get_settings), x_api_key: Optional[str] = Header(None)
) -> bool:
    """
    Verify API key if required.

    Guards every /private/ route.
    """
    if not settings.require_api_key:
        return True

    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is required",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if x_api_key not in settings.api_keys:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
        )

    return True
