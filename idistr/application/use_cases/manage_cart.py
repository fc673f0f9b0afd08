"""Cart mutations for a started session."""

from idistr.application.dto.responses import CartLineResponse, CartResponse
from idistr.application.session import PosSession
from idistr.config import get_logger
from idistr.core.entities import CartLine
from idistr.core.exceptions import MissingStoreError, ProductNotFoundError
from idistr.core.services import CartLedger

logger = get_logger(__name__)


def line_to_response(line: CartLine) -> CartLineResponse:
    return CartLineResponse(
        id=line.id,
        title=line.title,
        sku=line.sku,
        price=line.price,
        qty=line.qty,
        subtotal=line.subtotal,
    )


def cart_to_response(ledger: CartLedger) -> CartResponse:
    """Convert the ledger contents to the cart DTO."""
    lines = ledger.lines
    return CartResponse(
        lines=[line_to_response(line) for line in lines],
        total=ledger.total(),
        count=len(lines),
        store_id=ledger.selected_store_id or None,
        note=ledger.note,
    )


class ManageCartUseCase:
    """Add, update and remove cart lines against the session catalog."""

    def __init__(self, session: PosSession):
        self._session = session

    @property
    def ledger(self) -> CartLedger:
        return self._session.ledger

    async def add_item(self, product_id: str, qty: object = 1) -> CartLine:
        """Add a catalog product; unknown ids are rejected."""
        product = self._session.catalog.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return await self.ledger.add(product, qty)

    async def update_item(self, product_id: str, qty: object) -> CartLine:
        line = await self.ledger.set_quantity(product_id, qty)
        if line is None:
            raise ProductNotFoundError(product_id)
        return line

    async def remove_item(self, product_id: str) -> bool:
        return await self.ledger.remove(product_id)

    async def remove_line(self, index: int) -> bool:
        return await self.ledger.remove_at(index)

    async def clear(self) -> None:
        await self.ledger.clear()
        logger.info("cart_cleared", operator_id=self._session.operator_id)

    async def select_store(self, store_id: str | None) -> None:
        """Select a store from the rep's list; None clears the selection."""
        if store_id and self._session.catalog.get_store(store_id) is None:
            raise MissingStoreError(store_id)
        await self.ledger.select_store(store_id)

    def set_note(self, note: str | None) -> None:
        self.ledger.set_note(note)

    def to_response(self) -> CartResponse:
        return cart_to_response(self.ledger)
