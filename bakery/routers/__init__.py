from bakery.routers.events import router as events_router
from bakery.routers.health import router as health_router
from bakery.routers.inventory import router as inventory_router
from bakery.routers.products import router as products_router
from bakery.routers.users import router as users_router

__all__ = [
    "events_router",
    "health_router",
    "inventory_router",
    "products_router",
    "users_router",
]
