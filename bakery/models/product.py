from sqlalchemy import CheckConstraint, Column, Float, Integer, String

from bakery.core.validation import new_identifier
from bakery.database.base import Base, TimestampMixin

PRODUCT_CATEGORIES = ("postre", "pan", "galletas", "tortas")
PRODUCT_STATUSES = ("active", "inactive")
DEFAULT_PRODUCT_IMAGE = "default-product.jpg"


class Product(TimestampMixin, Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_identifier)
    sku = Column(String, nullable=False, unique=True)

    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    image = Column(String, nullable=False, default=DEFAULT_PRODUCT_IMAGE)

    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="active")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )


__all__ = ["DEFAULT_PRODUCT_IMAGE", "PRODUCT_CATEGORIES", "PRODUCT_STATUSES", "Product"]
