"""
Content Models
Pydantic models for content file, folder and product image endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ...models.content import FileContentType


class ContentFileInfo(BaseModel):
    """Stored file metadata (without the body)."""

    name: str = Field(..., description="File name")
    file_content_type: FileContentType
    folder: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0, description="Size in bytes")
    path: str = Field(..., description="Storage key")
    url: str = Field(..., description="Public URL")


class ContentFileList(BaseModel):
    """Files of a folder."""

    store: str
    file_content_type: FileContentType
    folder: Optional[str] = None
    files: List[ContentFileInfo]


class UploadResponse(BaseModel):
    """Result of an upload."""

    store: str
    files: List[ContentFileInfo]


class FolderRequest(BaseModel):
    """Folder creation request."""

    path: str = Field(..., min_length=1, max_length=1024, description="Slash-separated folder path")
    file_content_type: FileContentType = FileContentType.IMAGE


class FolderInfo(BaseModel):
    path: str
    name: str
    file_content_type: FileContentType


class FolderList(BaseModel):
    store: str
    parent: Optional[str] = None
    folders: List[FolderInfo]


class DeleteResponse(BaseModel):
    """Result of a removal."""

    status: str = "deleted"
    removed: int = Field(..., ge=0, description="Number of storage objects removed")
