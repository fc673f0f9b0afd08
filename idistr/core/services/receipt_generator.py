"""
Receipt generator.

Builds a printable receipt for cash settlements only; card, QR and invoice
payments leave their own verifiable record with the payment provider.
"""

from datetime import datetime

from idistr.config import get_logger
from idistr.core.entities import CartLine, PaymentSelection, Receipt, Store
from idistr.core.interfaces.receipt import IPrintSurface, IReceiptRenderer

logger = get_logger(__name__)


class ReceiptGenerator:
    """
    Renders a receipt and hands it to a print surface.

    The receipt is numbered with the server-assigned order id, so it is
    only generated after the backend confirmed the order.
    """

    def __init__(self, renderer: IReceiptRenderer, surface: IPrintSurface) -> None:
        self._renderer = renderer
        self._surface = surface

    def generate(
        self,
        lines: list[CartLine],
        store: Store | None,
        payment: PaymentSelection,
        note: str | None,
        total: float,
        order_id: str,
        issued_at: datetime | None = None,
    ) -> Receipt | None:
        """
        Produce and open the receipt for a cash order.

        Returns None for non-cash payments. A surface that cannot be opened
        is logged and ignored: the order is already recorded.
        """
        if not payment.is_cash:
            logger.debug("receipt_skipped", order_id=order_id, payment=payment.method.value)
            return None

        receipt = Receipt(
            order_id=order_id,
            issued_at=issued_at or datetime.now(),
            store=store,
            lines=list(lines),
            total=total,
            payment=payment,
            note=note or "",
        )
        receipt.content = self._renderer.render(receipt)
        receipt.media_type = self._renderer.media_type

        try:
            self._surface.open(receipt)
        except Exception as e:
            logger.warning("receipt_print_failed", order_id=order_id, error=str(e))
        else:
            logger.info("receipt_issued", order_id=order_id, lines=len(lines), total=total)

        return receipt
