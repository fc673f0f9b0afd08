"""Core domain entities."""

from idistr.core.entities.cart import CartLine
from idistr.core.entities.catalog import (
    FALLBACK_IMAGE_URL,
    Product,
    Rep,
    Store,
    canonical_id,
)
from idistr.core.entities.order import (
    OrderDraft,
    OrderItem,
    OrderResult,
    PaymentMethod,
    PaymentSelection,
    SubmissionState,
)
from idistr.core.entities.receipt import Receipt

__all__ = [
    # Catalog entities
    "Store",
    "Product",
    "Rep",
    "canonical_id",
    "FALLBACK_IMAGE_URL",
    # Cart entities
    "CartLine",
    # Order entities
    "PaymentMethod",
    "PaymentSelection",
    "OrderItem",
    "OrderDraft",
    "OrderResult",
    "SubmissionState",
    # Receipt
    "Receipt",
]
