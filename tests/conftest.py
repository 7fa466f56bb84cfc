"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.cms.local import LocalContentAssetsManager
from storefront.db.models import Base
from storefront.models.content import FileContentType, InputContentFile
from storefront.services import ContentService, MerchantStoreService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def local_manager(tmp_path):
    """Content manager writing under a temporary directory."""
    return LocalContentAssetsManager(tmp_path / "store")


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store_service(db_session, local_manager):
    return MerchantStoreService(db_session, content_manager=local_manager)


@pytest.fixture
def content_service(store_service, local_manager):
    return ContentService(store_service, local_manager, max_file_size=1024)


@pytest.fixture
def default_store(store_service):
    return store_service.create(code="DEFAULT", name="Default store")


@pytest.fixture
def png_file():
    return InputContentFile(
        file_name="logo.png", file_content_type=FileContentType.IMAGE, content=PNG_BYTES
    )


@pytest.fixture
def text_file():
    return InputContentFile(
        file_name="terms.txt", file_content_type=FileContentType.STATIC_FILE, content=b"terms"
    )
