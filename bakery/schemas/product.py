from datetime import datetime
from typing import ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bakery.core.validation import MAX_QUANTITY, AcceptsLegacyNames, PartialUpdate, RequiredText

ProductCategory = Literal["postre", "pan", "galletas", "tortas"]
ProductStatus = Literal["active", "inactive"]


def upper_sku(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.upper()


class ProductCreate(BaseModel):
    name: RequiredText
    description: str = ""
    price: float = Field(ge=0, allow_inf_nan=False)
    category: ProductCategory
    image: Optional[str] = None
    stock: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    sku: RequiredText
    status: ProductStatus = "active"

    upper_sku = field_validator("sku")(upper_sku)


class ProductUpdate(AcceptsLegacyNames, PartialUpdate):
    legacy_names: ClassVar[dict[str, str]] = {
        "nombre": "name",
        "descripcion": "description",
        "precio": "price",
        "categoria": "category",
        "estado": "status",
        "imagen": "image",
    }

    name: Optional[RequiredText] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    category: Optional[ProductCategory] = None
    image: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0, le=MAX_QUANTITY)
    sku: Optional[RequiredText] = None
    status: Optional[ProductStatus] = None

    upper_sku = field_validator("sku")(upper_sku)


class ProductRead(BaseModel):
    id: str
    sku: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    status: str
    image: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductSummary(BaseModel):
    id: str
    name: str
    sku: str

    model_config = ConfigDict(from_attributes=True)
