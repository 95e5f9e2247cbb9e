from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Index, Integer, String

from bakery.core.validation import new_identifier
from bakery.database.base import Base, TimestampMixin

MOVEMENT_KINDS = ("in", "out", "adjustment")


class InventoryMovement(TimestampMixin, Base):
    __tablename__ = "inventory_movements"

    id = Column(String(36), primary_key=True, default=new_identifier)

    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))

    amount = Column(Integer, nullable=False)
    location = Column(String, nullable=False)
    movement = Column(String, nullable=False)
    reason = Column(String, nullable=False)

    reference = Column(String)
    notes = Column(String)
    expiration_date = Column(Date)
    batch = Column(String)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_inventory_movements_amount_positive"),
        Index("idx_movement_product", "product_id"),
    )


__all__ = ["MOVEMENT_KINDS", "InventoryMovement"]
