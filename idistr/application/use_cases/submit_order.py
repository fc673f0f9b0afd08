"""Submit Order Use Case: validate, send once, print the cash receipt, clear the cart."""

from dataclasses import dataclass

from idistr.application.dto.responses import CheckoutResponse, CheckoutStatusResponse
from idistr.application.session import PosSession
from idistr.config import get_logger
from idistr.core.entities import OrderResult, PaymentSelection, Receipt, SubmissionState
from idistr.core.exceptions import SubmissionInProgressError
from idistr.core.interfaces import IOrderGateway
from idistr.core.services import OrderAssembler, ReceiptGenerator

logger = get_logger(__name__)


@dataclass
class SubmitOrderResult:
    """Result of a successful submission."""

    order: OrderResult
    total: float
    items: int
    receipt: Receipt | None = None


class SubmitOrderUseCase:
    """
    Submit the session's cart as an order.

    State machine: idle/succeeded/failed -> submitting -> succeeded | failed.
    Validation failures leave the state untouched; a failed submission
    keeps the cart so the operator can retry.
    """

    def __init__(
        self,
        gateway: IOrderGateway | None = None,
        receipt_generator: ReceiptGenerator | None = None,
    ):
        self._gateway = gateway
        self._receipt_generator = receipt_generator

    def _get_gateway(self) -> IOrderGateway:
        if self._gateway is None:
            from idistr.infrastructure.gateway import get_order_gateway

            self._gateway = get_order_gateway()
        return self._gateway

    def _get_receipt_generator(self) -> ReceiptGenerator:
        if self._receipt_generator is None:
            from idistr.infrastructure.receipts import get_print_surface, get_receipt_renderer

            self._receipt_generator = ReceiptGenerator(
                get_receipt_renderer(), get_print_surface()
            )
        return self._receipt_generator

    async def execute(
        self,
        session: PosSession,
        payment: PaymentSelection,
        note: str | None = None,
    ) -> SubmitOrderResult:
        """Execute submit order use case."""
        if session.submitting:
            raise SubmissionInProgressError()

        ledger = session.ledger
        note = ledger.note if note is None else note
        lines = ledger.lines
        store_id = ledger.selected_store_id

        draft = OrderAssembler(session.catalog).build(
            lines,
            store_id=store_id,
            operator_id=session.operator_id,
            payment=payment,
            note=note,
        )
        total = ledger.total()

        session.state = SubmissionState.SUBMITTING
        logger.info(
            "submit_order_started",
            operator_id=session.operator_id,
            store_id=draft.store_id,
            items=len(draft.items),
            payment=payment.method.value,
        )
        try:
            order = await self._get_gateway().create_order(draft)
        except BaseException as e:
            # Cancellation included.
            session.state = SubmissionState.FAILED
            logger.warning(
                "submit_order_failed",
                operator_id=session.operator_id,
                error=str(e),
            )
            raise

        session.state = SubmissionState.SUCCEEDED
        session.last_order_id = order.order_id

        receipt = None
        try:
            receipt = self._get_receipt_generator().generate(
                lines,
                store=session.catalog.get_store(draft.store_id),
                payment=payment,
                note=note,
                total=total,
                order_id=order.order_id,
            )
        except Exception as e:
            # Order already recorded server-side.
            logger.error("receipt_generation_failed", order_id=order.order_id, error=str(e))

        await ledger.clear()

        logger.info(
            "submit_order_complete",
            operator_id=session.operator_id,
            order_id=order.order_id,
            total=total,
            receipt=receipt is not None,
        )
        return SubmitOrderResult(order=order, total=total, items=len(draft.items), receipt=receipt)

    def status(self, session: PosSession) -> CheckoutStatusResponse:
        """Current submission state; lets a client recover after a dropped request."""
        return CheckoutStatusResponse(state=session.state, last_order_id=session.last_order_id)

    def to_response(self, result: SubmitOrderResult) -> CheckoutResponse:
        """Convert result to API response."""
        receipt_url = None
        if result.receipt is not None:
            receipt_url = f"/api/receipts/{result.order.order_id}"
        return CheckoutResponse(
            order_id=result.order.order_id,
            state=SubmissionState.SUCCEEDED,
            total=result.total,
            items=result.items,
            receipt_url=receipt_url,
        )
