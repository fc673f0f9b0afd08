"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Quantities are untyped: malformed values are clamped by the cart ledger,
not rejected.
"""

from typing import Any

from pydantic import BaseModel, Field

from idistr.core.entities import PaymentMethod


class AddCartItemRequest(BaseModel):
    """Add a catalog product to the cart."""

    product_id: str = Field(..., min_length=1, description="Catalog product ID")
    qty: Any = Field(
        default=1,
        description="Quantity to add; malformed values become 1",
        examples=[1, 5, "3"],
    )


class UpdateCartItemRequest(BaseModel):
    """Set the quantity of a cart line."""

    qty: Any = Field(
        ...,
        description="New quantity; values below 1 are clamped to 1",
        examples=[2, 10],
    )


class SelectStoreRequest(BaseModel):
    """Select the store the order is for."""

    store_id: str | None = Field(
        default=None,
        description="Store ID from the rep's store list; null clears the selection",
    )


class UpdateNoteRequest(BaseModel):
    """Free-text note attached to the order."""

    note: str = Field(default="", max_length=2000, description="Order note")


class CheckoutRequest(BaseModel):
    """Payment selection for order submission."""

    method: PaymentMethod = Field(
        default=PaymentMethod.CASH,
        description="Payment method",
        examples=["Cash", "Card", "QR", "Kaspi"],
    )
    txn: str | None = Field(
        default=None,
        description="Transaction / slip reference for non-cash payments",
    )
    note: str | None = Field(
        default=None,
        description="Order note; overrides the note stored on the cart",
    )
