"""
Content Service
Validates merchant assets and hands them to the content manager.
"""

import logging
from typing import Iterable, List, Optional

from ..cms import ContentAssetsManager, InvalidContentError
from ..cms import paths
from ..models.content import (
    ContentFolder,
    FileContentType,
    IMAGE_TYPES,
    InputContentFile,
    OutputContentFile,
    ProductImageSize,
)
from .store_service import MerchantStoreService

logger = logging.getLogger(__name__)


class ContentService:
    """
    Entry point for content operations.

    Every call checks that the merchant store exists. Uploads are checked
    for name, size and MIME type before any of them reaches storage.
    """

    def __init__(
        self,
        store_service: MerchantStoreService,
        content_manager: ContentAssetsManager,
        max_file_size: int,
        static_base_url: str = "/static/files",
    ):
        self.stores = store_service
        self.manager = content_manager
        self.max_file_size = max_file_size
        self.static_base_url = static_base_url

    def _store(self, store_code: str) -> str:
        return self.stores.get_by_code(store_code).code

    def _check(self, input_file: InputContentFile, image_required: bool) -> None:
        paths.validate_file_name(input_file.file_name)
        paths.normalize_folder(input_file.folder)
        if input_file.size == 0:
            raise InvalidContentError(f"File {input_file.file_name} is empty")
        if input_file.size > self.max_file_size:
            raise InvalidContentError(
                f"File {input_file.file_name} exceeds {self.max_file_size} bytes",
                details={"size": input_file.size, "max_size": self.max_file_size},
            )
        if image_required and not input_file.is_image:
            raise InvalidContentError(
                f"File {input_file.file_name} is not an image ({input_file.mime_type})",
                details={"mime_type": input_file.mime_type},
            )

    def url_for(self, key: str) -> str:
        return paths.public_url(self.static_base_url, key)

    # Content files

    def add_files(self, store_code: str, files: Iterable[InputContentFile]) -> List[str]:
        store = self._store(store_code)
        files = list(files)
        if not files:
            raise InvalidContentError("No files to store")

        for input_file in files:
            self._check(input_file, input_file.file_content_type in IMAGE_TYPES)

        keys = self.manager.add_files(store, files)
        logger.info(f"Stored {len(keys)} files for store {store}")
        return keys

    def add_file(self, store_code: str, input_file: InputContentFile) -> str:
        return self.add_files(store_code, [input_file])[0]

    def get_file(
        self,
        store_code: str,
        file_type: FileContentType,
        file_name: str,
        folder: Optional[str] = None,
    ) -> OutputContentFile:
        return self.manager.get_file(self._store(store_code), file_type, file_name, folder)

    def get_files(
        self, store_code: str, file_type: FileContentType, folder: Optional[str] = None
    ) -> List[OutputContentFile]:
        return self.manager.get_files(self._store(store_code), file_type, folder)

    def get_file_names(
        self, store_code: str, file_type: FileContentType, folder: Optional[str] = None
    ) -> List[str]:
        return self.manager.get_file_names(self._store(store_code), file_type, folder)

    def remove_file(
        self,
        store_code: str,
        file_type: FileContentType,
        file_name: str,
        folder: Optional[str] = None,
    ) -> None:
        self.manager.remove_file(self._store(store_code), file_type, file_name, folder)

    def remove_files(self, store_code: str) -> int:
        return self.manager.remove_files(self._store(store_code))

    # Folders

    def add_folder(self, store_code: str, file_type: FileContentType, path: str) -> ContentFolder:
        return self.manager.add_folder(self._store(store_code), file_type, path)

    def list_folders(
        self, store_code: str, file_type: FileContentType, parent: Optional[str] = None
    ) -> List[ContentFolder]:
        return self.manager.list_folders(self._store(store_code), file_type, parent)

    def remove_folder(self, store_code: str, file_type: FileContentType, path: str) -> int:
        return self.manager.remove_folder(self._store(store_code), file_type, path)

    # Product images

    def add_product_image(
        self,
        store_code: str,
        sku: str,
        image: InputContentFile,
        size: ProductImageSize = ProductImageSize.SMALL,
    ) -> str:
        store = self._store(store_code)
        self._check(image, image_required=True)
        return self.manager.add_product_image(store, sku, image, size)

    def get_product_image(
        self,
        store_code: str,
        sku: str,
        file_name: str,
        size: ProductImageSize = ProductImageSize.SMALL,
    ) -> OutputContentFile:
        return self.manager.get_product_image(self._store(store_code), sku, file_name, size)

    def get_product_images(
        self, store_code: str, sku: str, size: Optional[ProductImageSize] = None
    ) -> List[OutputContentFile]:
        return self.manager.get_product_images(self._store(store_code), sku, size)

    def remove_product_image(self, store_code: str, sku: str, file_name: str) -> int:
        return self.manager.remove_product_image(self._store(store_code), sku, file_name)

    def remove_product_images(self, store_code: str, sku: str) -> int:
        return self.manager.remove_product_images(self._store(store_code), sku)

    def remove_images(self, store_code: str) -> int:
        return self.manager.remove_images(self._store(store_code))
