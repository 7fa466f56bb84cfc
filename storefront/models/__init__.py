"""
Content Models
Pydantic models for merchant assets.
"""

from .content import (
    ContentFolder,
    FileContentType,
    IMAGE_TYPES,
    InputContentFile,
    OutputContentFile,
    PRODUCT_IMAGE_TYPES,
    ProductImageSize,
    StoredObject,
    guess_mime_type,
)

__all__ = [
    "ContentFolder",
    "FileContentType",
    "IMAGE_TYPES",
    "InputContentFile",
    "OutputContentFile",
    "PRODUCT_IMAGE_TYPES",
    "ProductImageSize",
    "StoredObject",
    "guess_mime_type",
]
