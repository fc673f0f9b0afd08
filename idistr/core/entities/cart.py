"""Cart line entity."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from idistr.core.entities.catalog import canonical_id


class CartLine(BaseModel):
    """
    A product line in the cart.

    ``price`` is a snapshot taken when the product was added and is never
    re-read from the catalog. ``id`` may be missing for lines restored from
    an older persisted cart until reconciliation resolves them.
    """

    id: str | None = None
    title: str = ""
    sku: str = ""
    price: float = 0.0
    qty: int = Field(default=1, ge=1)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str | None:
        if v is None:
            return None
        return canonical_id(v) or None

    @field_validator("sku", "title", mode="before")
    @classmethod
    def to_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def subtotal(self) -> float:
        return self.price * self.qty
