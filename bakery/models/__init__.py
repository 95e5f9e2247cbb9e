from bakery.models.event import Event
from bakery.models.inventory import InventoryMovement
from bakery.models.product import Product
from bakery.models.user import User

__all__ = ["Event", "InventoryMovement", "Product", "User"]
