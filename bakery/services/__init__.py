from bakery.services.event_service import create_event, delete_event, get_event, list_events, update_event
from bakery.services.inventory_service import (
    create_movement,
    delete_movement,
    expand_references,
    get_movement,
    list_movements,
    update_movement,
)
from bakery.services.product_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)
from bakery.services.user_service import login_user, register_user

__all__ = [
    "create_event",
    "create_movement",
    "create_product",
    "delete_event",
    "delete_movement",
    "delete_product",
    "expand_references",
    "get_event",
    "get_movement",
    "get_product",
    "list_events",
    "list_movements",
    "list_products",
    "login_user",
    "register_user",
    "update_event",
    "update_movement",
    "update_product",
]
