"""
Product Image Endpoints
POST   /api/v1/private/{store}/products/{sku}/images              - Upload an image
GET    /api/v1/{store}/products/{sku}/images                      - List images
GET    /api/v1/{store}/products/{sku}/images/{size}/{name}        - Download an image
DELETE /api/v1/private/{store}/products/{sku}/images/{name}       - Remove an image (all sizes)
DELETE /api/v1/private/{store}/products/{sku}/images              - Remove all images of a product
DELETE /api/v1/private/{store}/products/images                    - Remove all product images of a store
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from ...config.settings import CMSSettings, get_cms_settings
from ...models.content import FileContentType, InputContentFile, ProductImageSize
from ...services import ContentService
from ..dependencies import get_content_service, verify_api_key
from ..errors import InvalidRequestError
from ..models.content import ContentFileInfo, ContentFileList, DeleteResponse
from .content import file_info, file_response, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["product images"])


@router.delete(
    "/private/{store}/products/images",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_store_images(
    store: str, service: ContentService = Depends(get_content_service)
) -> DeleteResponse:
    return DeleteResponse(removed=service.remove_images(store))


@router.post(
    "/private/{store}/products/{sku}/images",
    response_model=ContentFileInfo,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_api_key)],
)
def upload_product_image(
    store: str,
    sku: str,
    file: UploadFile = File(..., description="Image file"),
    size: ProductImageSize = Form(ProductImageSize.SMALL),
    service: ContentService = Depends(get_content_service),
    cms_settings: CMSSettings = Depends(get_cms_settings),
) -> ContentFileInfo:
    if not file.filename:
        raise InvalidRequestError("Uploaded image has no file name")

    image = InputContentFile(
        file_name=file.filename,
        file_content_type=size.content_type,
        mime_type=file.content_type if file.content_type != "application/octet-stream" else None,
        content=read_upload(file, cms_settings.max_file_size),
    )
    key = service.add_product_image(store, sku, image, size)

    return ContentFileInfo(
        name=image.file_name,
        file_content_type=image.file_content_type,
        folder=sku,
        mime_type=image.mime_type,
        size=image.size,
        path=key,
        url=service.url_for(key),
    )


@router.get("/{store}/products/{sku}/images", response_model=ContentFileList)
def list_product_images(
    store: str,
    sku: str,
    size: Optional[ProductImageSize] = Query(None),
    service: ContentService = Depends(get_content_service),
) -> ContentFileList:
    images = service.get_product_images(store, sku, size)
    return ContentFileList(
        store=store,
        file_content_type=size.content_type if size else FileContentType.PRODUCT,
        folder=sku,
        files=[file_info(service, image) for image in images],
    )


@router.get("/{store}/products/{sku}/images/{size}/{name}")
def download_product_image(
    store: str,
    sku: str,
    size: ProductImageSize,
    name: str,
    service: ContentService = Depends(get_content_service),
    cms_settings: CMSSettings = Depends(get_cms_settings),
) -> Response:
    image = service.get_product_image(store, sku, name, size)
    return file_response(image, cms_settings.cache_max_age)


@router.delete(
    "/private/{store}/products/{sku}/images/{name}",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_product_image(
    store: str,
    sku: str,
    name: str,
    service: ContentService = Depends(get_content_service),
) -> DeleteResponse:
    return DeleteResponse(removed=service.remove_product_image(store, sku, name))


@router.delete(
    "/private/{store}/products/{sku}/images",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_product_images(
    store: str,
    sku: str,
    service: ContentService = Depends(get_content_service),
) -> DeleteResponse:
    removed = service.remove_product_images(store, sku)
    logger.info(f"Removed {removed} images of product {sku} in store {store}")
    return DeleteResponse(removed=removed)
