"""Receipt entity for cash settlements."""

from datetime import datetime

from pydantic import BaseModel, Field

from idistr.core.entities.cart import CartLine
from idistr.core.entities.catalog import Store
from idistr.core.entities.order import PaymentSelection


class Receipt(BaseModel):
    """A printable receipt for a completed cash order."""

    order_id: str  # server-assigned order id doubles as the receipt number
    issued_at: datetime = Field(default_factory=datetime.now)
    store: Store | None = None
    lines: list[CartLine] = Field(default_factory=list)
    total: float = 0.0
    payment: PaymentSelection
    note: str = ""

    # Rendered document
    content: bytes = b""
    media_type: str = "text/html; charset=utf-8"
