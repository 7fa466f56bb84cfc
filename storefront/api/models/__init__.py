"""
Pydantic Models
Request/response models for API endpoints.
"""

from .content import (
    ContentFileInfo,
    ContentFileList,
    DeleteResponse,
    FolderInfo,
    FolderList,
    FolderRequest,
    UploadResponse,
)
from .store import StoreCreate, StoreList, StoreResponse, StoreUpdate

__all__ = [
    "ContentFileInfo",
    "ContentFileList",
    "DeleteResponse",
    "FolderInfo",
    "FolderList",
    "FolderRequest",
    "UploadResponse",
    "StoreCreate",
    "StoreList",
    "StoreResponse",
    "StoreUpdate",
]
