"""Order domain entities: payment, draft, result and submission state."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from idistr.core.entities.catalog import canonical_id


class PaymentMethod(str, Enum):
    """Accepted payment methods (values are the backend wire strings)."""

    CASH = "Cash"
    CARD = "Card"
    QR = "QR"
    INVOICE = "Kaspi"  # Kaspi invoice


class PaymentSelection(BaseModel):
    """Payment captured before submission."""

    method: PaymentMethod = PaymentMethod.CASH
    txn: str = ""  # transaction / slip reference for non-cash audit trail

    @field_validator("txn", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @property
    def is_cash(self) -> bool:
        return self.method == PaymentMethod.CASH


class OrderItem(BaseModel):
    """A submitted order line."""

    id: str
    qty: int
    price: float


class OrderDraft(BaseModel):
    """
    Validated, submission-ready order.

    Built once per submission attempt by the order assembler and dropped
    after the call resolves.
    """

    telegram_id: str
    store_id: str
    items: list[OrderItem]
    payment: PaymentSelection
    note: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Return the wire body for order creation."""
        return {
            "telegram_id": self.telegram_id,
            "store_id": self.store_id,
            "items": [
                {"id": item.id, "qty": item.qty, "price": item.price}
                for item in self.items
            ],
            "payment": {"method": self.payment.method.value, "txn": self.payment.txn},
            "note": self.note,
        }


class OrderResult(BaseModel):
    """Server response to order creation; the id is a display token only."""

    order_id: str = Field(..., min_length=1)

    @field_validator("order_id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        return canonical_id(v)


class SubmissionState(str, Enum):
    """Order submission lifecycle."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
