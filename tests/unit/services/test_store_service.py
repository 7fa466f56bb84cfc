"""
Tests for merchant store CRUD.
"""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from storefront.cms.errors import ContentNotFoundError, InvalidContentError, StorageBackendError
from storefront.models.content import FileContentType
from storefront.services import DuplicateStoreError, StoreNotFoundError


def test_create_and_get(store_service):
    created = store_service.create(code="DEFAULT", name="Default store", email="a@b.com")

    store = store_service.get_by_code("DEFAULT")
    assert store.id == created.id
    assert store.email == "a@b.com"
    assert store.currency == "USD"
    assert store.default_language == "en"
    assert store.created_at is not None


def test_duplicate_code(store_service):
    store_service.create(code="DEFAULT", name="Default store")

    with pytest.raises(DuplicateStoreError):
        store_service.create(code="DEFAULT", name="Again")


def test_invalid_code(store_service):
    with pytest.raises(InvalidContentError):
        store_service.create(code="not valid", name="x")


def test_missing_store(store_service):
    with pytest.raises(StoreNotFoundError):
        store_service.get_by_code("NOPE")


def test_list_is_paginated(store_service):
    for code in ["C", "A", "B"]:
        store_service.create(code=code, name=f"Store {code}")

    items, total = store_service.list(offset=1, limit=1)

    assert total == 3
    assert [s.code for s in items] == ["B"]


def test_update_ignores_unset_fields(store_service):
    store_service.create(code="DEFAULT", name="Default store", currency="EUR")

    store = store_service.update("DEFAULT", {"name": "Renamed", "currency": None})

    assert store.name == "Renamed"
    assert store.currency == "EUR"


def test_delete_removes_assets(store_service, local_manager, png_file):
    store_service.create(code="DEFAULT", name="Default store")
    local_manager.add_file("DEFAULT", png_file)

    assert store_service.delete("DEFAULT") > 0

    assert not store_service.exists("DEFAULT")
    with pytest.raises(ContentNotFoundError):
        local_manager.get_file("DEFAULT", FileContentType.IMAGE, "logo.png")


def test_failed_row_delete_keeps_assets(store_service, db_session, local_manager, png_file, monkeypatch):
    store_service.create(code="DEFAULT", name="Default store")
    local_manager.add_file("DEFAULT", png_file)
    monkeypatch.setattr(db_session, "flush", Mock(side_effect=SQLAlchemyError("locked")))

    with pytest.raises(SQLAlchemyError):
        store_service.delete("DEFAULT")

    monkeypatch.undo()
    assert store_service.exists("DEFAULT")
    assert local_manager.get_file("DEFAULT", FileContentType.IMAGE, "logo.png").content == png_file.content


def test_failed_asset_removal_keeps_store(store_service, local_manager, monkeypatch):
    store_service.create(code="DEFAULT", name="Default store")
    monkeypatch.setattr(
        local_manager, "remove_files", Mock(side_effect=StorageBackendError("unreachable"))
    )

    with pytest.raises(StorageBackendError):
        store_service.delete("DEFAULT")

    assert store_service.exists("DEFAULT")
