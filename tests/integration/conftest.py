"""
Integration test fixtures
"""

import pytest
from fastapi.testclient import TestClient

from storefront.api.config import APISettings, get_settings
from storefront.api.dependencies import get_cms, get_db
from storefront.api.main import create_app
from storefront.config.settings import CMSSettings, get_cms_settings


@pytest.fixture
def api_settings():
    return APISettings(require_api_key=False, database_url="sqlite://")


@pytest.fixture
def cms_settings(tmp_path):
    return CMSSettings(method="local", local_root=str(tmp_path / "store"), max_file_size=1024)


@pytest.fixture
def test_api_client(db_session, local_manager, api_settings, cms_settings):
    """API client wired to an in-memory database and a temporary content root."""
    app = create_app()

    def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_cms] = lambda: local_manager
    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_cms_settings] = lambda: cms_settings

    return TestClient(app)


@pytest.fixture
def client_with_store(test_api_client):
    response = test_api_client.post(
        "/api/v1/private/stores", json={"code": "DEFAULT", "name": "Default store"}
    )
    assert response.status_code == 201
    return test_api_client
