"""API route modules."""

from idistr.api.routes.cart import router as cart_router
from idistr.api.routes.catalog import router as catalog_router
from idistr.api.routes.checkout import router as checkout_router
from idistr.api.routes.health import router as health_router
from idistr.api.routes.receipts import router as receipts_router
from idistr.api.routes.session import router as session_router

__all__ = [
    "health_router",
    "session_router",
    "catalog_router",
    "cart_router",
    "checkout_router",
    "receipts_router",
]
