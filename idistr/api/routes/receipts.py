"""Receipt retrieval endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from idistr.api.dependencies import get_outbox
from idistr.application.dto.responses import ErrorResponse
from idistr.core.exceptions import ReceiptNotFoundError
from idistr.infrastructure.receipts import ReceiptOutbox

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


@router.get(
    "/{order_id}",
    responses={
        200: {"content": {"text/html": {}, "application/pdf": {}}},
        404: {"model": ErrorResponse, "description": "No receipt for the order"},
    },
)
async def get_receipt(
    order_id: str,
    outbox: ReceiptOutbox = Depends(get_outbox),
) -> Response:
    """Rendered receipt of a cash order, ready to print."""
    receipt = outbox.get(order_id)
    if receipt is None:
        raise ReceiptNotFoundError(order_id)
    return Response(content=receipt.content, media_type=receipt.media_type)
