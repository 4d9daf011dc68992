from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from shopsmart.core.deps import get_product_service
from shopsmart.schemas import (
    ErrorRead,
    HealthRead,
    MessageRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from shopsmart.services import ProductService

router = APIRouter(prefix="/api")

# Largest id an INTEGER (int4) primary key can hold; anything else cannot match a row.
_MAX_ID = 2**31 - 1

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorRead}}
_FAULT = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorRead}}


def parse_product_id(product_id: str) -> Optional[int]:
    """
    Parse the ``{product_id}`` path segment.

    A segment that is not an integer yields None, which the service reports as
    "Product not found" without querying storage.
    """
    try:
        value = int(product_id.strip())
    except ValueError:
        return None
    if abs(value) > _MAX_ID:
        return None
    return value


@router.get("/health", response_model=HealthRead)
def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc),
        "message": "ShopSmart Backend is running",
    }


@router.get("/products", response_model=list[ProductRead], responses=_FAULT)
def http_list_products(service: ProductService = Depends(get_product_service)):
    return service.list_products()


@router.get("/products/{product_id}", response_model=ProductRead, responses={**_NOT_FOUND, **_FAULT})
def http_get_product(
    product_id: Optional[int] = Depends(parse_product_id),
    service: ProductService = Depends(get_product_service),
):
    return service.get_product(product_id)


@router.post(
    "/products",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorRead}, **_FAULT},
)
def http_create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    return service.create_product(payload)


@router.put(
    "/products/{product_id}",
    response_model=ProductRead,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorRead}, **_NOT_FOUND, **_FAULT},
)
def http_update_product(
    payload: Optional[ProductUpdate] = Body(None),
    product_id: Optional[int] = Depends(parse_product_id),
    service: ProductService = Depends(get_product_service),
):
    return service.update_product(product_id, payload)


@router.delete("/products/{product_id}", response_model=MessageRead, responses={**_NOT_FOUND, **_FAULT})
def http_delete_product(
    product_id: Optional[int] = Depends(parse_product_id),
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id)
    return {"message": "Product deleted successfully"}
