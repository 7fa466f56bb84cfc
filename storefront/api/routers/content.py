"""
Content Endpoints
POST   /api/v1/private/{store}/content/files            - Upload files
GET    /api/v1/{store}/content/files                    - List files of a folder
GET    /api/v1/{store}/content/files/{type}/{name}      - Download a file
DELETE /api/v1/private/{store}/content/files/{type}/{name} - Remove a file
DELETE /api/v1/private/{store}/content                  - Remove every asset of a store
GET    /api/v1/{store}/content/folders                  - List folders
POST   /api/v1/private/{store}/content/folders          - Create a folder
DELETE /api/v1/private/{store}/content/folders          - Remove a folder recursively
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from ...config.settings import CMSSettings, get_cms_settings
from ...models.content import FileContentType, InputContentFile, OutputContentFile
from ...services import ContentService
from ..dependencies import get_content_service, verify_api_key
from ..errors import InvalidRequestError
from ..models.content import (
    ContentFileInfo,
    ContentFileList,
    DeleteResponse,
    FolderInfo,
    FolderList,
    FolderRequest,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["content"])


def read_upload(upload: UploadFile, max_size: int) -> bytes:
    """Read an upload, at most one byte past max_size so oversize is detectable."""
    return upload.file.read(max_size + 1)


def file_info(service: ContentService, output: OutputContentFile) -> ContentFileInfo:
    return ContentFileInfo(
        name=output.file_name,
        file_content_type=output.file_content_type,
        folder=output.folder,
        mime_type=output.mime_type,
        size=output.size,
        path=output.path,
        url=service.url_for(output.path),
    )


def content_disposition(file_name: str) -> str:
    """Inline disposition with an ASCII fallback name and the RFC 5987 UTF-8 name."""
    fallback = "".join(
        c if 0x20 <= ord(c) < 0x7F and c not in '"\\' else "_" for c in file_name
    )
    return f"inline; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name, safe='')}"


def file_response(output: OutputContentFile, cache_max_age: int) -> Response:
    return Response(
        content=output.content,
        media_type=output.mime_type,
        headers={
            "Cache-Control": f"public, max-age={cache_max_age}",
            "Content-Disposition": content_disposition(output.file_name),
        },
    )


@router.post(
    "/private/{store}/content/files",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_api_key)],
)
def upload_files(
    store: str,
    files: List[UploadFile] = File(..., description="Files to store"),
    file_content_type: FileContentType = Form(FileContentType.STATIC_FILE),
    folder: Optional[str] = Form(None),
    service: ContentService = Depends(get_content_service),
    cms_settings: CMSSettings = Depends(get_cms_settings),
) -> UploadResponse:
    """
    Upload one or more files.

    The upload is all or nothing: when one file is rejected or fails,
    none of them are kept.
    """
    if not files:
        raise InvalidRequestError("No files uploaded")

    inputs = [
        InputContentFile(
            file_name=upload.filename or "",
            file_content_type=file_content_type,
            mime_type=upload.content_type if upload.content_type != "application/octet-stream" else None,
            content=read_upload(upload, cms_settings.max_file_size),
            folder=folder,
        )
        for upload in files
    ]

    keys = service.add_files(store, inputs)

    return UploadResponse(
        store=store,
        files=[
            ContentFileInfo(
                name=item.file_name,
                file_content_type=item.file_content_type,
                folder=item.folder,
                mime_type=item.mime_type,
                size=item.size,
                path=key,
                url=service.url_for(key),
            )
            for item, key in zip(inputs, keys)
        ],
    )


@router.get("/{store}/content/files", response_model=ContentFileList)
def list_files(
    store: str,
    file_content_type: FileContentType = Query(FileContentType.IMAGE, alias="type"),
    folder: Optional[str] = Query(None),
    service: ContentService = Depends(get_content_service),
) -> ContentFileList:
    """List the files directly inside a folder."""
    files = service.get_files(store, file_content_type, folder)
    return ContentFileList(
        store=store,
        file_content_type=file_content_type,
        folder=folder,
        files=[file_info(service, f) for f in files],
    )


@router.get("/{store}/content/files/{file_content_type}/{name}")
def download_file(
    store: str,
    file_content_type: FileContentType,
    name: str,
    folder: Optional[str] = Query(None),
    service: ContentService = Depends(get_content_service),
    cms_settings: CMSSettings = Depends(get_cms_settings),
) -> Response:
    output = service.get_file(store, file_content_type, name, folder)
    return file_response(output, cms_settings.cache_max_age)


@router.delete(
    "/private/{store}/content/files/{file_content_type}/{name}",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_file(
    store: str,
    file_content_type: FileContentType,
    name: str,
    folder: Optional[str] = Query(None),
    service: ContentService = Depends(get_content_service),
) -> DeleteResponse:
    service.remove_file(store, file_content_type, name, folder)
    return DeleteResponse(removed=1)


@router.delete(
    "/private/{store}/content",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_store_content(
    store: str, service: ContentService = Depends(get_content_service)
) -> DeleteResponse:
    """Remove every asset of the store, product images included."""
    removed = service.remove_files(store)
    logger.info(f"Removed all content of store {store}: {removed} objects")
    return DeleteResponse(removed=removed)


@router.get("/{store}/content/folders", response_model=FolderList)
def list_folders(
    store: str,
    file_content_type: FileContentType = Query(FileContentType.IMAGE, alias="type"),
    parent: Optional[str] = Query(None),
    service: ContentService = Depends(get_content_service),
) -> FolderList:
    folders = service.list_folders(store, file_content_type, parent)
    return FolderList(
        store=store,
        parent=parent,
        folders=[
            FolderInfo(path=f.path, name=f.name, file_content_type=f.file_content_type)
            for f in folders
        ],
    )


@router.post(
    "/private/{store}/content/folders",
    response_model=FolderInfo,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_api_key)],
)
def create_folder(
    store: str,
    request: FolderRequest,
    service: ContentService = Depends(get_content_service),
) -> FolderInfo:
    folder = service.add_folder(store, request.file_content_type, request.path)
    return FolderInfo(path=folder.path, name=folder.name, file_content_type=folder.file_content_type)


@router.delete(
    "/private/{store}/content/folders",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_folder(
    store: str,
    path: str = Query(..., min_length=1),
    file_content_type: FileContentType = Query(FileContentType.IMAGE, alias="type"),
    service: ContentService = Depends(get_content_service),
) -> DeleteResponse:
    removed = service.remove_folder(store, file_content_type, path)
    return DeleteResponse(removed=removed)
