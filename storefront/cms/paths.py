"""
Storage key layout.

Content:        {store}/{FILE_CONTENT_TYPE}/{folder/...}/{file_name}
Product images: {store}/{PRODUCT|PRODUCTLG}/{sku}/{file_name}
Folder markers end with "/".
"""

import re
from typing import Optional
from urllib.parse import quote

from ..models.content import FileContentType, ProductImageSize
from .errors import InvalidContentError

SEPARATOR = "/"
MAX_NAME_LENGTH = 255
# Names starting with this are kept for backend bookkeeping files
RESERVED_PREFIX = ".cms-"

_STORE_CODE_RE = re.compile(r"^[A-Za-z0-9_-]{1,100}$")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def validate_store_code(store_code: str) -> str:
    if not store_code or not _STORE_CODE_RE.match(store_code):
        raise InvalidContentError(
            f"Invalid merchant store code: {store_code!r}", details={"store": store_code}
        )
    return store_code


def validate_file_name(name: str, label: str = "file name") -> str:
    """Reject names that could escape their namespace."""
    if not name or name in (".", ".."):
        raise InvalidContentError(f"Invalid {label}: {name!r}")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidContentError(f"{label.capitalize()} exceeds {MAX_NAME_LENGTH} characters")
    if SEPARATOR in name or "\\" in name or _CONTROL_CHARS_RE.search(name):
        raise InvalidContentError(f"Invalid {label}: {name!r}")
    if name.startswith(RESERVED_PREFIX):
        raise InvalidContentError(f"Invalid {label}: {name!r} uses a reserved prefix")
    return name


def normalize_folder(folder: Optional[str]) -> Optional[str]:
    """
    Normalize a folder path.

    Leading/trailing slashes and empty segments are dropped; every
    remaining segment is validated. Returns None for the root.
    """
    if folder is None:
        return None

    segments = [s for s in folder.strip().split(SEPARATOR) if s]
    if not segments:
        return None

    for segment in segments:
        validate_file_name(segment, label="folder name")
    return SEPARATOR.join(segments)


def store_prefix(store_code: str) -> str:
    return validate_store_code(store_code) + SEPARATOR


def content_prefix(
    store_code: str, file_type: FileContentType, folder: Optional[str] = None
) -> str:
    """Prefix (ending with "/") under which files of a folder live."""
    prefix = f"{store_prefix(store_code)}{FileContentType(file_type).value}{SEPARATOR}"
    folder = normalize_folder(folder)
    if folder:
        prefix += folder + SEPARATOR
    return prefix


def content_key(
    store_code: str, file_type: FileContentType, file_name: str, folder: Optional[str] = None
) -> str:
    return content_prefix(store_code, file_type, folder) + validate_file_name(file_name)


def product_image_prefix(store_code: str, sku: str, size: ProductImageSize) -> str:
    validate_file_name(sku, label="product sku")
    return content_prefix(store_code, ProductImageSize(size).content_type, sku)


def product_image_key(store_code: str, sku: str, file_name: str, size: ProductImageSize) -> str:
    return product_image_prefix(store_code, sku, size) + validate_file_name(file_name)


def split_key(key: str, prefix: str) -> str:
    """Return the part of key below prefix."""
    if not key.startswith(prefix):
        raise ValueError(f"Key {key!r} is not under {prefix!r}")
    return key[len(prefix):]


def public_url(base_url: str, key: str) -> str:
    """URL under which a stored key is served."""
    return f"{base_url.rstrip(SEPARATOR)}/{quote(key)}"
