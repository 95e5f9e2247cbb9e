import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from bakery.core.errors import ServiceError
from bakery.database.session import commit_or_conflict
from bakery.models.product import DEFAULT_PRODUCT_IMAGE, Product
from bakery.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

SKU_TAKEN_MESSAGE = "A product with this SKU already exists"


def normalize_sku(sku: str) -> str:
    normalized = (sku or "").strip().upper()
    if not normalized:
        raise ServiceError.validation([{"field": "sku", "message": "SKU is required"}])
    return normalized


def find_product_by_sku(db: Session, sku: str) -> Optional[Product]:
    return (
        db.execute(select(Product).where(Product.sku == normalize_sku(sku)))
        .scalars()
        .first()
    )


def get_product(db: Session, sku: str) -> Product:
    product = find_product_by_sku(db, sku)
    if product is None:
        raise ServiceError.not_found("Product {} not found".format(normalize_sku(sku)))
    return product


def list_products(
    db: Session,
    *,
    category: Optional[str] = None,
    status: Optional[str] = None,
) -> list[Product]:
    stmt = select(Product)
    if category:
        stmt = stmt.where(Product.category == category)
    if status:
        stmt = stmt.where(Product.status == status)
    stmt = stmt.order_by(Product.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def create_product(db: Session, payload: ProductCreate) -> Product:
    sku = normalize_sku(payload.sku)
    if find_product_by_sku(db, sku):
        raise ServiceError.conflict(SKU_TAKEN_MESSAGE)

    product = Product(
        sku=sku,
        name=payload.name,
        description=payload.description,
        price=payload.price,
        category=payload.category,
        image=payload.image or DEFAULT_PRODUCT_IMAGE,
        stock=payload.stock,
        status=payload.status,
    )
    db.add(product)
    commit_or_conflict(db, SKU_TAKEN_MESSAGE)
    db.refresh(product)
    logger.info("Created product %s", product.sku)
    return product


def update_product(db: Session, sku: str, payload: ProductUpdate) -> Product:
    product = get_product(db, sku)
    changes = payload.changes()

    new_sku = changes.get("sku")
    if new_sku is not None:
        new_sku = normalize_sku(new_sku)
        if new_sku != product.sku and find_product_by_sku(db, new_sku):
            raise ServiceError.conflict(SKU_TAKEN_MESSAGE)
        changes["sku"] = new_sku

    for field, value in changes.items():
        setattr(product, field, value)

    commit_or_conflict(db, SKU_TAKEN_MESSAGE)
    db.refresh(product)
    logger.info("Updated product %s (%s)", product.sku, ", ".join(sorted(changes)) or "no changes")
    return product


def delete_product(db: Session, sku: str) -> str:
    product = get_product(db, sku)
    db.delete(product)
    db.commit()
    logger.info("Deleted product %s", product.sku)
    return product.sku


__all__ = [
    "SKU_TAKEN_MESSAGE",
    "create_product",
    "delete_product",
    "find_product_by_sku",
    "get_product",
    "list_products",
    "normalize_sku",
    "update_product",
]
