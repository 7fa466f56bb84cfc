"""
Merchant Store Service
CRUD over merchant stores.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..cms import ContentAssetsManager
from ..cms.paths import validate_store_code
from ..db.models import MerchantStore
from .errors import DuplicateStoreError, StoreNotFoundError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "domain_name", "default_language", "currency")


class MerchantStoreService:
    """
    Creates, reads, updates and deletes merchant stores.

    Deleting a store also removes its assets from content storage.
    """

    def __init__(self, db: Session, content_manager: Optional[ContentAssetsManager] = None):
        self.db = db
        self.content_manager = content_manager

    def get_by_code(self, code: str) -> MerchantStore:
        store = self.db.query(MerchantStore).filter(MerchantStore.code == code).first()
        if store is None:
            raise StoreNotFoundError(code)
        return store

    def exists(self, code: str) -> bool:
        return (
            self.db.query(MerchantStore.id).filter(MerchantStore.code == code).first() is not None
        )

    def list(self, offset: int = 0, limit: int = 20) -> Tuple[List[MerchantStore], int]:
        """Return a page of stores ordered by code, and the total count."""
        query = self.db.query(MerchantStore)
        total = query.count()
        items = query.order_by(MerchantStore.code).offset(offset).limit(limit).all()
        return items, total

    def create(self, code: str, name: str, **fields: Any) -> MerchantStore:
        validate_store_code(code)
        if self.exists(code):
            raise DuplicateStoreError(code)

        store = MerchantStore(code=code, name=name)
        self._apply(store, fields)
        self.db.add(store)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateStoreError(code)
        self.db.refresh(store)

        logger.info(f"Created merchant store {code}")
        return store

    def update(self, code: str, fields: Dict[str, Any]) -> MerchantStore:
        store = self.get_by_code(code)
        self._apply(store, fields)
        self.db.commit()
        self.db.refresh(store)
        return store

    def delete(self, code: str) -> int:
        """
        Delete a store and its assets.

        Returns:
            Number of storage objects removed
        """
        store = self.get_by_code(code)

        # Row goes first so a failed delete leaves the assets in place
        removed = 0
        try:
            self.db.delete(store)
            self.db.flush()
            if self.content_manager is not None:
                removed = self.content_manager.remove_files(code)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Deleted merchant store {code} ({removed} assets removed)")
        return removed

    @staticmethod
    def _apply(store: MerchantStore, fields: Dict[str, Any]) -> None:
        for name in UPDATABLE_FIELDS:
            value = fields.get(name)
            if value is not None:
                setattr(store, name, value)
