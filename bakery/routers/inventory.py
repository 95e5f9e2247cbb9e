from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bakery.core.responses import envelope
from bakery.core.security import Principal
from bakery.dependencies import get_db, require_auth
from bakery.schemas.common import Envelope, ErrorEnvelope
from bakery.schemas.inventory import (
    InventoryMovementCreate,
    InventoryMovementRead,
    InventoryMovementUpdate,
    MovementKind,
)
from bakery.services import inventory_service

router = APIRouter(
    prefix="/api/inventory",
    tags=["Inventory"],
    dependencies=[Depends(require_auth)],
    responses={
        400: {"model": ErrorEnvelope},
        401: {"model": ErrorEnvelope},
        404: {"model": ErrorEnvelope},
    },
)

_EXPAND_DESCRIPTION = "Comma-separated references to embed: product, user. Empty for none."


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[InventoryMovementRead])
def create_movement(
    payload: InventoryMovementCreate,
    principal: Principal = Depends(require_auth),
    db: Session = Depends(get_db),
):
    movement = inventory_service.create_movement(db, payload, user_id=principal.subject_id)
    data = inventory_service.expand_references(db, [movement], ())[0]
    return envelope(data, "Inventory {} movement recorded".format(movement.movement))


@router.put("", response_model=Envelope[InventoryMovementRead])
def update_movement(payload: InventoryMovementUpdate, db: Session = Depends(get_db)):
    movement = inventory_service.update_movement(db, payload)
    data = inventory_service.expand_references(db, [movement])[0]
    return envelope(data, "Inventory movement updated")


@router.get("", response_model=Envelope[list[InventoryMovementRead]])
def list_movements(
    product_id: Optional[str] = Query(None, description="Filter by product identifier"),
    movement: Optional[MovementKind] = Query(None, description="Filter by movement kind"),
    expand: Optional[str] = Query(None, description=_EXPAND_DESCRIPTION),
    db: Session = Depends(get_db),
):
    references = inventory_service.parse_expand(expand)
    movements = inventory_service.list_movements(db, product_id=product_id, movement=movement)
    return envelope(inventory_service.expand_references(db, movements, references))


@router.get("/{movement_id}", response_model=Envelope[InventoryMovementRead])
def get_movement(
    movement_id: str,
    expand: Optional[str] = Query(None, description=_EXPAND_DESCRIPTION),
    db: Session = Depends(get_db),
):
    references = inventory_service.parse_expand(expand)
    movement = inventory_service.get_movement(db, movement_id)
    return envelope(inventory_service.expand_references(db, [movement], references)[0])


@router.delete("/{movement_id}", response_model=Envelope[dict])
def delete_movement(movement_id: str, db: Session = Depends(get_db)):
    deleted_id = inventory_service.delete_movement(db, movement_id)
    return envelope({"id": deleted_id}, "Inventory movement deleted")


__all__ = ["router"]
