"""
Services
Store and content operations used by the API and scripts.
"""

from .content_service import ContentService
from .errors import DuplicateStoreError, StoreNotFoundError
from .store_service import MerchantStoreService

__all__ = [
    "ContentService",
    "MerchantStoreService",
    "DuplicateStoreError",
    "StoreNotFoundError",
]
