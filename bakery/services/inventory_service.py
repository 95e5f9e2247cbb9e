import logging
from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from bakery.core.errors import ServiceError
from bakery.core.validation import ensure_identifier
from bakery.database.session import commit_or_conflict
from bakery.models.inventory import InventoryMovement
from bakery.models.product import Product
from bakery.models.user import User
from bakery.schemas.inventory import (
    InventoryMovementCreate,
    InventoryMovementRead,
    InventoryMovementUpdate,
    UserSummary,
)
from bakery.schemas.product import ProductSummary

logger = logging.getLogger(__name__)

EXPANDABLE_REFERENCES = ("product", "user")
_REPLACED_FIELDS = (
    "product_id",
    "amount",
    "location",
    "movement",
    "reason",
    "reference",
    "notes",
    "expiration_date",
    "batch",
)
MOVEMENT_CONFLICT_MESSAGE = "Inventory movement references a missing product or user"


def parse_expand(value: Optional[str]) -> tuple[str, ...]:
    if value is None:
        return EXPANDABLE_REFERENCES
    requested = [part.strip() for part in value.split(",") if part.strip()]
    unknown = sorted(set(requested) - set(EXPANDABLE_REFERENCES))
    if unknown:
        raise ServiceError.validation(
            [
                {
                    "field": "expand",
                    "message": "unknown reference(s): {}; allowed: {}".format(
                        ", ".join(unknown), ", ".join(EXPANDABLE_REFERENCES)
                    ),
                }
            ]
        )
    return tuple(dict.fromkeys(requested))


def _require_product(db: Session, product_id: str) -> Product:
    product = db.get(Product, ensure_identifier(product_id, "product_id"))
    if product is None:
        raise ServiceError.not_found("Product not found")
    return product


def _load_movement(db: Session, movement_id: str) -> InventoryMovement:
    movement = db.get(InventoryMovement, ensure_identifier(movement_id))
    if movement is None:
        raise ServiceError.not_found("Inventory movement not found")
    return movement


def expand_references(
    db: Session,
    movements: Sequence[InventoryMovement],
    expand: Iterable[str] = EXPANDABLE_REFERENCES,
) -> list[InventoryMovementRead]:
    """Serialize movements, embedding summaries of the requested references."""
    expand = set(expand)
    products: dict[str, Product] = {}
    users: dict[str, User] = {}

    if "product" in expand:
        product_ids = {movement.product_id for movement in movements}
        if product_ids:
            rows = db.execute(select(Product).where(Product.id.in_(product_ids))).scalars()
            products = {product.id: product for product in rows}
    if "user" in expand:
        user_ids = {movement.user_id for movement in movements if movement.user_id}
        if user_ids:
            rows = db.execute(select(User).where(User.id.in_(user_ids))).scalars()
            users = {user.id: user for user in rows}

    results = []
    for movement in movements:
        item = InventoryMovementRead.model_validate(movement)
        product = products.get(movement.product_id)
        if product is not None:
            item.product = ProductSummary.model_validate(product)
        user = users.get(movement.user_id) if movement.user_id else None
        if user is not None:
            item.user = UserSummary.model_validate(user)
        results.append(item)
    return results


def create_movement(
    db: Session,
    payload: InventoryMovementCreate,
    user_id: Optional[str] = None,
) -> InventoryMovement:
    product = _require_product(db, payload.product_id)
    movement = InventoryMovement(
        product_id=product.id,
        user_id=user_id,
        **payload.model_dump(exclude={"product_id"}),
    )
    db.add(movement)
    commit_or_conflict(db, MOVEMENT_CONFLICT_MESSAGE)
    db.refresh(movement)
    logger.info(
        "Recorded %s movement %s of %s for product %s",
        movement.movement,
        movement.id,
        movement.amount,
        product.sku,
    )
    return movement


def update_movement(db: Session, payload: InventoryMovementUpdate) -> InventoryMovement:
    movement = _load_movement(db, payload.id)
    _require_product(db, payload.product_id)

    values = payload.model_dump(include=set(_REPLACED_FIELDS))
    for field in _REPLACED_FIELDS:
        setattr(movement, field, values.get(field))

    commit_or_conflict(db, MOVEMENT_CONFLICT_MESSAGE)
    db.refresh(movement)
    logger.info("Updated inventory movement %s", movement.id)
    return movement


def list_movements(
    db: Session,
    *,
    product_id: Optional[str] = None,
    movement: Optional[str] = None,
) -> list[InventoryMovement]:
    stmt = select(InventoryMovement)
    if product_id:
        stmt = stmt.where(InventoryMovement.product_id == ensure_identifier(product_id, "product_id"))
    if movement:
        stmt = stmt.where(InventoryMovement.movement == movement)
    stmt = stmt.order_by(InventoryMovement.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def get_movement(db: Session, movement_id: str) -> InventoryMovement:
    return _load_movement(db, movement_id)


def delete_movement(db: Session, movement_id: str) -> str:
    movement = _load_movement(db, movement_id)
    db.delete(movement)
    db.commit()
    logger.info("Deleted inventory movement %s", movement.id)
    return movement.id


__all__ = [
    "EXPANDABLE_REFERENCES",
    "create_movement",
    "delete_movement",
    "expand_references",
    "get_movement",
    "list_movements",
    "parse_expand",
    "update_movement",
]
