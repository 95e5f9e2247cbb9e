from datetime import date, datetime
from typing import ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from bakery.core.validation import MAX_QUANTITY, AcceptsLegacyNames, Identifier, RequiredText
from bakery.schemas.product import ProductSummary

MovementKind = Literal["in", "out", "adjustment"]


class InventoryMovementCreate(AcceptsLegacyNames):
    legacy_names: ClassVar[dict[str, str]] = {"product": "product_id"}

    product_id: Identifier
    amount: int = Field(gt=0, le=MAX_QUANTITY)
    location: RequiredText
    movement: MovementKind
    reason: RequiredText
    reference: Optional[str] = None
    notes: Optional[str] = None
    expiration_date: Optional[date] = None
    batch: Optional[str] = None


class InventoryMovementUpdate(InventoryMovementCreate):
    id: Identifier


class UserSummary(BaseModel):
    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class InventoryMovementRead(BaseModel):
    id: str
    product_id: str
    user_id: Optional[str] = None
    amount: int
    location: str
    movement: str
    reason: str
    reference: Optional[str] = None
    notes: Optional[str] = None
    expiration_date: Optional[date] = None
    batch: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    product: Optional[ProductSummary] = None
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)
