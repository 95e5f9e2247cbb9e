from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bakery.core.responses import envelope
from bakery.dependencies import get_db, require_auth
from bakery.schemas.common import Envelope, ErrorEnvelope
from bakery.schemas.product import ProductCategory, ProductCreate, ProductRead, ProductStatus, ProductUpdate
from bakery.services import product_service

router = APIRouter(prefix="/api/products", tags=["Products"])

_PROTECTED = [Depends(require_auth)]
_ERRORS = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
    409: {"model": ErrorEnvelope},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[ProductRead],
    dependencies=_PROTECTED,
    responses=_ERRORS,
)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    product = product_service.create_product(db, payload)
    return envelope(ProductRead.model_validate(product), "Product created")


@router.get("", response_model=Envelope[list[ProductRead]])
def list_products(
    category: Optional[ProductCategory] = Query(None, description="Filter by category"),
    status_filter: Optional[ProductStatus] = Query(None, alias="status", description="Filter by status"),
    db: Session = Depends(get_db),
):
    products = product_service.list_products(db, category=category, status=status_filter)
    return envelope([ProductRead.model_validate(product) for product in products])


@router.get("/{sku}", response_model=Envelope[ProductRead], responses=_ERRORS)
def get_product(sku: str, db: Session = Depends(get_db)):
    product = product_service.get_product(db, sku)
    return envelope(ProductRead.model_validate(product))


@router.put(
    "/{sku}",
    response_model=Envelope[ProductRead],
    dependencies=_PROTECTED,
    responses=_ERRORS,
)
def update_product(sku: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    product = product_service.update_product(db, sku, payload)
    return envelope(ProductRead.model_validate(product), "Product updated")


@router.delete(
    "/{sku}",
    response_model=Envelope[dict],
    dependencies=_PROTECTED,
    responses=_ERRORS,
)
def delete_product(sku: str, db: Session = Depends(get_db)):
    deleted_sku = product_service.delete_product(db, sku)
    return envelope({"sku": deleted_sku}, "Product {} deleted".format(deleted_sku))


__all__ = ["router"]
