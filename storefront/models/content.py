"""
Content file models.
Describe merchant assets moving in and out of the storage managers.
"""

import mimetypes
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_MIME_TYPE = "application/octet-stream"


class FileContentType(str, Enum):
    """Kinds of merchant assets, each stored under its own namespace."""

    IMAGE = "IMAGE"
    STATIC_FILE = "STATIC_FILE"
    LOGO = "LOGO"
    PROPERTY = "PROPERTY"
    MANUFACTURER = "MANUFACTURER"
    PRODUCT = "PRODUCT"  # small product images
    PRODUCTLG = "PRODUCTLG"  # large product images


# Types handled through the product image operations only
PRODUCT_IMAGE_TYPES = frozenset({FileContentType.PRODUCT, FileContentType.PRODUCTLG})

# Types that must carry an image/* MIME type
IMAGE_TYPES = frozenset(
    {
        FileContentType.IMAGE,
        FileContentType.LOGO,
        FileContentType.MANUFACTURER,
        FileContentType.PRODUCT,
        FileContentType.PRODUCTLG,
    }
)


class ProductImageSize(str, Enum):
    """Product image variants."""

    SMALL = "SMALL"
    LARGE = "LARGE"

    @property
    def content_type(self) -> FileContentType:
        if self is ProductImageSize.LARGE:
            return FileContentType.PRODUCTLG
        return FileContentType.PRODUCT

    @classmethod
    def for_content_type(cls, file_type: FileContentType) -> "ProductImageSize":
        if FileContentType(file_type) is FileContentType.PRODUCTLG:
            return cls.LARGE
        if FileContentType(file_type) is FileContentType.PRODUCT:
            return cls.SMALL
        raise ValueError(f"{file_type} is not a product image type")


def guess_mime_type(file_name: str) -> str:
    """Guess a MIME type from a file name."""
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or DEFAULT_MIME_TYPE


class InputContentFile(BaseModel):
    """
    A file to store.

    mime_type is guessed from the file name when not given.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    file_name: str = Field(..., min_length=1, max_length=255)
    file_content_type: FileContentType = FileContentType.STATIC_FILE
    mime_type: Optional[str] = None
    content: bytes = Field(default=b"", repr=False)
    folder: Optional[str] = None

    @model_validator(mode="after")
    def fill_mime_type(self):
        if not self.mime_type:
            self.mime_type = guess_mime_type(self.file_name)
        return self

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_image(self) -> bool:
        return (self.mime_type or "").startswith("image/")


class OutputContentFile(BaseModel):
    """A stored file read back from a manager."""

    file_name: str
    file_content_type: FileContentType
    mime_type: str = DEFAULT_MIME_TYPE
    content: bytes = Field(default=b"", repr=False)
    folder: Optional[str] = None
    path: str

    @property
    def size(self) -> int:
        return len(self.content)


class ContentFolder(BaseModel):
    """A folder inside a content type namespace."""

    path: str
    file_content_type: FileContentType = FileContentType.IMAGE

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


class StoredObject(BaseModel):
    """Raw object returned by a backend."""

    data: bytes = Field(repr=False)
    mime_type: Optional[str] = None
