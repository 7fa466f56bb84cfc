"""
Static File Endpoint
GET /static/files/{store}/{type}/{path} - Public asset serving
"""

import logging

from fastapi import APIRouter, Depends, Response

from ...config.settings import CMSSettings, get_cms_settings
from ...models.content import PRODUCT_IMAGE_TYPES, FileContentType, ProductImageSize
from ...services import ContentService
from ..dependencies import get_content_service
from .content import file_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["static"])


@router.get("/static/files/{store}/{file_content_type}/{path:path}")
def serve_static_file(
    store: str,
    file_content_type: FileContentType,
    path: str,
    service: ContentService = Depends(get_content_service),
    cms_settings: CMSSettings = Depends(get_cms_settings),
) -> Response:
    """
    Serve a stored asset by its public URL.

    The last path segment is the file name, anything before it the folder.
    Product images are served as {sku}/{name}.
    """
    folder, _, name = path.rpartition("/")
    if file_content_type in PRODUCT_IMAGE_TYPES:
        size = ProductImageSize.for_content_type(file_content_type)
        output = service.get_product_image(store, folder, name, size)
    else:
        output = service.get_file(store, file_content_type, name, folder or None)
    return file_response(output, cms_settings.cache_max_age)
