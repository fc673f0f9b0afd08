"""Data transfer objects for the API layer."""

from idistr.application.dto.requests import (
    AddCartItemRequest,
    CheckoutRequest,
    SelectStoreRequest,
    UpdateCartItemRequest,
    UpdateNoteRequest,
)
from idistr.application.dto.responses import (
    CartLineResponse,
    CartResponse,
    CheckoutResponse,
    CheckoutStatusResponse,
    ErrorResponse,
    HealthResponse,
    ProductResponse,
    RepResponse,
    ResetResponse,
    SessionResponse,
    StoreResponse,
)

__all__ = [
    "AddCartItemRequest",
    "CheckoutRequest",
    "SelectStoreRequest",
    "UpdateCartItemRequest",
    "UpdateNoteRequest",
    "CartLineResponse",
    "CartResponse",
    "CheckoutResponse",
    "CheckoutStatusResponse",
    "ErrorResponse",
    "HealthResponse",
    "ProductResponse",
    "RepResponse",
    "ResetResponse",
    "SessionResponse",
    "StoreResponse",
]
