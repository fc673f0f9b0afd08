"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from idistr.core.entities import SubmissionState


class StoreResponse(BaseModel):
    """Store the rep can sell to."""

    id: str = Field(..., description="Store ID")
    name: str = Field(default="", description="Store name")
    address: str = Field(default="", description="Street address")
    bin_iin: str | None = Field(default=None, description="Business registration number")
    phone: str | None = Field(default=None, description="Contact phone")


class ProductResponse(BaseModel):
    """Catalog product."""

    id: str = Field(..., description="Product ID")
    title: str = Field(default="", description="Display title")
    sku: str = Field(default="", description="Stock keeping unit")
    unit: str = Field(default="", description="Unit of measure")
    category: str | None = Field(default=None, description="Category")
    price: float = Field(default=0.0, description="Unit price")
    pack_size: int = Field(default=1, description="Units per pack")
    image_url: str = Field(..., description="Image URL, with fallback placeholder")


class CartLineResponse(BaseModel):
    """One cart line."""

    id: str | None = Field(default=None, description="Product ID; null when unresolved")
    title: str = Field(default="", description="Title snapshot")
    sku: str = Field(default="", description="SKU snapshot")
    price: float = Field(..., description="Unit price snapshot")
    qty: int = Field(..., description="Quantity")
    subtotal: float = Field(..., description="price x qty")


class CartResponse(BaseModel):
    """Cart contents and totals."""

    lines: list[CartLineResponse] = Field(default_factory=list)
    total: float = Field(default=0.0, description="Sum of line subtotals")
    count: int = Field(default=0, description="Number of lines")
    store_id: str | None = Field(default=None, description="Selected store ID")
    note: str = Field(default="", description="Order note")


class RepResponse(BaseModel):
    """Sales rep; backend fields are passed through."""

    id: str | None = None
    name: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict)


class SessionResponse(BaseModel):
    """Started operator session."""

    operator_id: str = Field(..., description="Resolved operator identifier")
    rep: RepResponse | None = Field(default=None, description="Sales rep record")
    stores: list[StoreResponse] = Field(default_factory=list)
    products_count: int = Field(default=0, description="Products in the catalog")
    categories: list[str] = Field(default_factory=list)
    cart: CartResponse
    repaired_lines: int = Field(default=0, description="Cart lines re-linked to the catalog")
    unresolved_lines: int = Field(default=0, description="Cart lines left without a product")


class ResetResponse(BaseModel):
    """Local state wiped."""

    operator_id: str
    reset: bool = True


class CheckoutResponse(BaseModel):
    """Accepted order."""

    order_id: str = Field(..., description="Server-assigned order ID")
    state: SubmissionState = Field(..., description="Submission state after the attempt")
    total: float = Field(..., description="Order total")
    items: int = Field(..., description="Number of order lines")
    receipt_url: str | None = Field(
        default=None, description="Printable receipt (cash payments only)"
    )


class CheckoutStatusResponse(BaseModel):
    """Submission state of the operator's session."""

    state: SubmissionState = Field(..., description="Current submission state")
    last_order_id: str | None = Field(
        default=None, description="ID of the last order accepted in this session"
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    backend_configured: bool = Field(..., description="Backend base URL is set")
    state_backend: str = Field(..., description="Local state storage backend")
    uptime_seconds: float = Field(..., description="Seconds since startup")


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. EMPTY_CART)
    - message: human-readable description
    - hint: suggested recovery action
    - detail: error context; backend failures carry the server detail verbatim
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: Any = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
