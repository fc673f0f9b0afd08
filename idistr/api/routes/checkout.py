"""Order checkout endpoint."""

from fastapi import APIRouter, Depends, status

from idistr.api.dependencies import get_session, get_submit_order_use_case
from idistr.application.dto.requests import CheckoutRequest
from idistr.application.dto.responses import (
    CheckoutResponse,
    CheckoutStatusResponse,
    ErrorResponse,
)
from idistr.application.session import PosSession
from idistr.application.use_cases import SubmitOrderUseCase
from idistr.core.entities import PaymentSelection

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post(
    "",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Order preconditions not met"},
        409: {"model": ErrorResponse, "description": "Submission in progress or unresolved line"},
        502: {"model": ErrorResponse, "description": "Backend rejected the order"},
    },
)
async def checkout(
    request: CheckoutRequest,
    session: PosSession = Depends(get_session),
    use_case: SubmitOrderUseCase = Depends(get_submit_order_use_case),
) -> CheckoutResponse:
    """
    Submit the cart as an order.

    Cash orders get a printable receipt under the returned ``receipt_url``.
    On failure the cart is kept for a retry.
    """
    payment = PaymentSelection(method=request.method, txn=request.txn)
    result = await use_case.execute(session, payment, note=request.note)
    return use_case.to_response(result)


@router.get("/status", response_model=CheckoutStatusResponse)
async def checkout_status(
    session: PosSession = Depends(get_session),
    use_case: SubmitOrderUseCase = Depends(get_submit_order_use_case),
) -> CheckoutStatusResponse:
    """State of the last submission and the last accepted order ID."""
    return use_case.status(session)
