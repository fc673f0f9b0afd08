"""
Order assembler.

Turns the cart, the selected store, the operator identity and the payment
choice into a validated order draft. Preconditions are checked in a fixed
order and the first violation is raised, before any network call.
"""

import math
from typing import Any

from idistr.config import get_logger
from idistr.core.entities import (
    CartLine,
    OrderDraft,
    OrderItem,
    PaymentSelection,
    canonical_id,
)
from idistr.core.exceptions import (
    EmptyCartError,
    InvalidPriceError,
    InvalidQuantityError,
    MissingOperatorError,
    MissingStoreError,
    UnresolvedLineItemError,
)
from idistr.core.services.catalog_cache import CatalogCache

logger = get_logger(__name__)


def _to_number(value: Any) -> float | None:
    """Coerce to a finite float, or None when that is not possible."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class OrderAssembler:
    """
    Builds order drafts against the session catalog.

    Validation sequence:
    1. store selected and known to the catalog  -> MissingStoreError
    2. at least one line                        -> EmptyCartError
    3. every line resolved to a catalog product -> UnresolvedLineItemError
    4. operator identifier present              -> MissingOperatorError
    5. positive integer quantities              -> InvalidQuantityError
       non-negative numeric prices              -> InvalidPriceError
    """

    def __init__(self, catalog: CatalogCache) -> None:
        self._catalog = catalog

    def build(
        self,
        lines: list[CartLine],
        store_id: Any,
        operator_id: Any,
        payment: PaymentSelection,
        note: str | None = None,
    ) -> OrderDraft:
        """Validate the inputs and return the draft to submit."""
        store_key = canonical_id(store_id)
        if not store_key or self._catalog.get_store(store_key) is None:
            raise MissingStoreError(store_id)

        if not lines:
            raise EmptyCartError()

        for line in lines:
            if not line.id or not self._catalog.has_product(line.id):
                raise UnresolvedLineItemError(sku=line.sku, title=line.title)

        operator_key = canonical_id(operator_id)
        if not operator_key:
            raise MissingOperatorError()

        items = [self._to_item(line) for line in lines]

        draft = OrderDraft(
            telegram_id=operator_key,
            store_id=store_key,
            items=items,
            payment=payment,
            note=note or "",
        )
        logger.debug(
            "order_draft_built",
            store_id=store_key,
            items=len(items),
            payment=payment.method.value,
        )
        return draft

    @staticmethod
    def _to_item(line: CartLine) -> OrderItem:
        qty = _to_number(line.qty)
        if qty is None or qty < 1 or not qty.is_integer():
            raise InvalidQuantityError(line.id, line.qty)

        price = _to_number(line.price)
        if price is None or price < 0:
            raise InvalidPriceError(line.id, line.price)

        return OrderItem(id=line.id or "", qty=int(qty), price=price)
