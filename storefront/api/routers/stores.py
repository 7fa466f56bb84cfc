"""
Merchant Store Endpoints
POST   /api/v1/private/stores         - Create a store
GET    /api/v1/private/stores         - List stores
GET    /api/v1/stores/{code}          - Get a store
PUT    /api/v1/private/stores/{code}  - Update a store
DELETE /api/v1/private/stores/{code}  - Delete a store and its assets
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...services import MerchantStoreService
from ..config import APISettings, get_settings
from ..dependencies import get_store_service, verify_api_key
from ..models.content import DeleteResponse
from ..models.store import StoreCreate, StoreList, StoreResponse, StoreUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["stores"])


@router.post(
    "/private/stores",
    response_model=StoreResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_api_key)],
)
def create_store(
    request: StoreCreate, stores: MerchantStoreService = Depends(get_store_service)
) -> StoreResponse:
    store = stores.create(**request.model_dump())
    return StoreResponse.model_validate(store)


@router.get(
    "/private/stores", response_model=StoreList, dependencies=[Depends(verify_api_key)]
)
def list_stores(
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    stores: MerchantStoreService = Depends(get_store_service),
    settings: APISettings = Depends(get_settings),
) -> StoreList:
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    items, total = stores.list(offset=offset, limit=limit)
    return StoreList(
        items=[StoreResponse.model_validate(s) for s in items],
        total=total,
        offset=offset,
        limit=limit,
    )


@router.get("/stores/{code}", response_model=StoreResponse)
def get_store(code: str, stores: MerchantStoreService = Depends(get_store_service)) -> StoreResponse:
    return StoreResponse.model_validate(stores.get_by_code(code))


@router.put(
    "/private/stores/{code}",
    response_model=StoreResponse,
    dependencies=[Depends(verify_api_key)],
)
def update_store(
    code: str,
    request: StoreUpdate,
    stores: MerchantStoreService = Depends(get_store_service),
) -> StoreResponse:
    store = stores.update(code, request.model_dump(exclude_unset=True))
    return StoreResponse.model_validate(store)


@router.delete(
    "/private/stores/{code}",
    response_model=DeleteResponse,
    dependencies=[Depends(verify_api_key)],
)
def delete_store(
    code: str, stores: MerchantStoreService = Depends(get_store_service)
) -> DeleteResponse:
    """Delete the store and remove all of its assets."""
    removed = stores.delete(code)
    return DeleteResponse(removed=removed)
