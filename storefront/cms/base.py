"""
Content Assets Manager
Abstract per-merchant-store asset storage shared by every backend.

Backends implement a small key/value contract (put, get, list by prefix,
delete, delete by prefix). Everything else, folders, product images and
multi-file operations, is built on top of it here.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Optional

from ..models.content import (
    ContentFolder,
    FileContentType,
    InputContentFile,
    OutputContentFile,
    PRODUCT_IMAGE_TYPES,
    ProductImageSize,
    StoredObject,
    guess_mime_type,
)
from . import paths
from .errors import ContentNotFoundError, InvalidContentError

logger = logging.getLogger(__name__)


class ContentAssetsManager(ABC):
    """
    Stores and retrieves merchant assets.

    Subclasses provide the storage primitives.
    """

    backend_name: str = "abstract"

    # Storage primitives

    @abstractmethod
    def put_object(self, key: str, data: bytes, mime_type: Optional[str] = None) -> None:
        """Write an object. Keys ending with "/" are folder markers."""

    @abstractmethod
    def get_object(self, key: str) -> Optional[StoredObject]:
        """Read an object, None when missing."""

    @abstractmethod
    def list_keys(self, prefix: str) -> Iterator[str]:
        """Yield every key under prefix, folder markers included."""

    @abstractmethod
    def delete_object(self, key: str) -> bool:
        """Delete one object. Returns False when it did not exist."""

    def delete_prefix(self, prefix: str) -> int:
        """Delete every key under prefix. Returns the number removed."""
        deleted = 0
        for key in list(self.list_keys(prefix)):
            if self.delete_object(key):
                deleted += 1
        return deleted

    @abstractmethod
    def ping(self) -> bool:
        """Check that the backend is reachable."""

    # Content files

    def add_file(self, store_code: str, input_file: InputContentFile) -> str:
        """
        Store one file for a merchant store.

        Args:
            store_code: Merchant store code
            input_file: File to store

        Returns:
            Storage key of the file
        """
        key = self._content_key(store_code, input_file)
        self.put_object(key, input_file.content, input_file.mime_type)
        logger.info(f"Stored {key} ({input_file.size} bytes) on {self.backend_name}")
        return key

    def add_files(self, store_code: str, input_files: Iterable[InputContentFile]) -> List[str]:
        """
        Store several files. All or nothing.

        When one file fails, every key touched by this call is put back the
        way it was (overwritten files restored, new files removed) and the
        original error is raised.
        """
        written: List[str] = []
        previous: Dict[str, Optional[StoredObject]] = {}
        try:
            for input_file in input_files:
                key = self._content_key(store_code, input_file)
                if key not in previous:
                    previous[key] = self.get_object(key)
                written.append(self.add_file(store_code, input_file))
        except Exception:
            logger.warning(f"Rolling back {len(previous)} files for store {store_code}")
            self._restore(previous)
            raise
        return written

    def _restore(self, previous: Dict[str, Optional[StoredObject]]) -> None:
        for key, prior in reversed(list(previous.items())):
            try:
                if prior is None:
                    self.delete_object(key)
                else:
                    self.put_object(key, prior.data, prior.mime_type)
            except Exception as e:
                logger.error(f"Rollback failed for {key}: {e}")

    def get_file(
        self,
        store_code: str,
        file_type: FileContentType,
        file_name: str,
        folder: Optional[str] = None,
    ) -> OutputContentFile:
        file_type = self._check_generic_type(file_type)
        key = paths.content_key(store_code, file_type, file_name, folder)
        stored = self.get_object(key)
        if stored is None:
            raise ContentNotFoundError(key)
        return self._to_output(key, stored, file_type, paths.normalize_folder(folder))

    def get_files(
        self, store_code: str, file_type: FileContentType, folder: Optional[str] = None
    ) -> List[OutputContentFile]:
        """Read every file directly inside a folder."""
        file_type = self._check_generic_type(file_type)
        folder = paths.normalize_folder(folder)
        prefix = paths.content_prefix(store_code, file_type, folder)

        files = []
        for name in self._child_files(prefix):
            key = prefix + name
            stored = self.get_object(key)
            if stored is None:
                # Removed between listing and reading
                continue
            files.append(self._to_output(key, stored, file_type, folder))
        return files

    def get_file_names(
        self, store_code: str, file_type: FileContentType, folder: Optional[str] = None
    ) -> List[str]:
        file_type = self._check_generic_type(file_type)
        prefix = paths.content_prefix(store_code, file_type, folder)
        return self._child_files(prefix)

    def remove_file(
        self,
        store_code: str,
        file_type: FileContentType,
        file_name: str,
        folder: Optional[str] = None,
    ) -> None:
        file_type = self._check_generic_type(file_type)
        key = paths.content_key(store_code, file_type, file_name, folder)
        if not self.delete_object(key):
            raise ContentNotFoundError(key)
        logger.info(f"Removed {key} from {self.backend_name}")

    def remove_files(self, store_code: str) -> int:
        """Remove every asset of a merchant store, product images included."""
        prefix = paths.store_prefix(store_code)
        count = self.delete_prefix(prefix)
        logger.info(f"Removed {count} objects under {prefix} from {self.backend_name}")
        return count

    # Folders

    def add_folder(self, store_code: str, file_type: FileContentType, path: str) -> ContentFolder:
        file_type = self._check_generic_type(file_type)
        folder = paths.normalize_folder(path)
        if folder is None:
            raise InvalidContentError("Folder path is empty")

        self.put_object(paths.content_prefix(store_code, file_type, folder), b"")
        return ContentFolder(path=folder, file_content_type=file_type)

    def list_folders(
        self, store_code: str, file_type: FileContentType, parent: Optional[str] = None
    ) -> List[ContentFolder]:
        """List folders directly inside parent (root when None)."""
        file_type = self._check_generic_type(file_type)
        parent = paths.normalize_folder(parent)
        prefix = paths.content_prefix(store_code, file_type, parent)

        names = set()
        for key in self.list_keys(prefix):
            rest = paths.split_key(key, prefix)
            if paths.SEPARATOR in rest:
                names.add(rest.split(paths.SEPARATOR, 1)[0])

        return [
            ContentFolder(
                path=f"{parent}{paths.SEPARATOR}{name}" if parent else name,
                file_content_type=file_type,
            )
            for name in sorted(names)
        ]

    def remove_folder(self, store_code: str, file_type: FileContentType, path: str) -> int:
        """Remove a folder and everything below it."""
        file_type = self._check_generic_type(file_type)
        folder = paths.normalize_folder(path)
        if folder is None:
            raise InvalidContentError("Folder path is empty")

        prefix = paths.content_prefix(store_code, file_type, folder)
        count = self.delete_prefix(prefix)
        if count == 0:
            raise ContentNotFoundError(prefix)
        logger.info(f"Removed folder {prefix} ({count} objects) from {self.backend_name}")
        return count

    # Product images

    def add_product_image(
        self,
        store_code: str,
        sku: str,
        image: InputContentFile,
        size: ProductImageSize = ProductImageSize.SMALL,
    ) -> str:
        key = paths.product_image_key(store_code, sku, image.file_name, size)
        self.put_object(key, image.content, image.mime_type)
        logger.info(f"Stored product image {key} ({image.size} bytes) on {self.backend_name}")
        return key

    def get_product_image(
        self,
        store_code: str,
        sku: str,
        file_name: str,
        size: ProductImageSize = ProductImageSize.SMALL,
    ) -> OutputContentFile:
        key = paths.product_image_key(store_code, sku, file_name, size)
        stored = self.get_object(key)
        if stored is None:
            raise ContentNotFoundError(key)
        return self._to_output(key, stored, ProductImageSize(size).content_type, sku)

    def get_product_images(
        self, store_code: str, sku: str, size: Optional[ProductImageSize] = None
    ) -> List[OutputContentFile]:
        sizes = [ProductImageSize(size)] if size else list(ProductImageSize)

        images = []
        for image_size in sizes:
            prefix = paths.product_image_prefix(store_code, sku, image_size)
            for name in self._child_files(prefix):
                stored = self.get_object(prefix + name)
                if stored is not None:
                    images.append(
                        self._to_output(prefix + name, stored, image_size.content_type, sku)
                    )
        return images

    def remove_product_image(self, store_code: str, sku: str, file_name: str) -> int:
        """Remove an image in every size."""
        count = 0
        for size in ProductImageSize:
            if self.delete_object(paths.product_image_key(store_code, sku, file_name, size)):
                count += 1
        if count == 0:
            raise ContentNotFoundError(f"{store_code}/{sku}/{file_name}")
        return count

    def remove_product_images(self, store_code: str, sku: str) -> int:
        return sum(
            self.delete_prefix(paths.product_image_prefix(store_code, sku, size))
            for size in ProductImageSize
        )

    def remove_images(self, store_code: str) -> int:
        """Remove every product image of a merchant store."""
        return sum(
            self.delete_prefix(paths.content_prefix(store_code, size.content_type))
            for size in ProductImageSize
        )

    # Migration

    def iter_store_keys(self, store_code: str) -> Iterator[str]:
        return self.list_keys(paths.store_prefix(store_code))

    def copy_store_to(self, target: "ContentAssetsManager", store_code: str) -> int:
        """
        Copy every object of a store into another manager.

        Returns:
            Number of files copied (folder markers are copied, not counted)
        """
        copied = 0
        for key in self.iter_store_keys(store_code):
            if key.endswith(paths.SEPARATOR):
                target.put_object(key, b"")
                continue
            stored = self.get_object(key)
            if stored is None:
                continue
            target.put_object(key, stored.data, stored.mime_type)
            copied += 1
        return copied

    # Helpers

    @staticmethod
    def _check_generic_type(file_type: FileContentType) -> FileContentType:
        file_type = FileContentType(file_type)
        if file_type in PRODUCT_IMAGE_TYPES:
            raise InvalidContentError(
                f"{file_type.value} files are stored as product images",
                details={"file_content_type": file_type.value},
            )
        return file_type

    def _content_key(self, store_code: str, input_file: InputContentFile) -> str:
        file_type = self._check_generic_type(input_file.file_content_type)
        return paths.content_key(store_code, file_type, input_file.file_name, input_file.folder)

    def _child_files(self, prefix: str) -> List[str]:
        names = []
        for key in self.list_keys(prefix):
            rest = paths.split_key(key, prefix)
            if rest and paths.SEPARATOR not in rest:
                names.append(rest)
        return sorted(names)

    @staticmethod
    def _to_output(
        key: str, stored: StoredObject, file_type: FileContentType, folder: Optional[str]
    ) -> OutputContentFile:
        file_name = key.rsplit(paths.SEPARATOR, 1)[-1]
        return OutputContentFile(
            file_name=file_name,
            file_content_type=file_type,
            mime_type=stored.mime_type or guess_mime_type(file_name),
            content=stored.data,
            folder=folder,
            path=key,
        )

    def __repr__(self):
        return f"<{self.__class__.__name__}(backend={self.backend_name})>"
