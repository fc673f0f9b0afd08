"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
- detail: error context (the backend's own detail for gateway failures)
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from idistr.application.dto.responses import ErrorResponse
from idistr.config import get_logger
from idistr.core.exceptions import (
    ConfigurationError,
    GatewayError,
    IdentityMissingError,
    IdistrError,
    OperatorNotFoundError,
    OrderValidationError,
    PayloadContractError,
    ProductNotFoundError,
    ReceiptNotFoundError,
    SessionNotStartedError,
    SubmissionInProgressError,
    UnresolvedLineItemError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first isinstance match wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    IdentityMissingError: status.HTTP_401_UNAUTHORIZED,
    OperatorNotFoundError: status.HTTP_404_NOT_FOUND,
    PayloadContractError: 422,
    GatewayError: status.HTTP_502_BAD_GATEWAY,
    UnresolvedLineItemError: status.HTTP_409_CONFLICT,
    OrderValidationError: status.HTTP_400_BAD_REQUEST,
    SubmissionInProgressError: status.HTTP_409_CONFLICT,
    SessionNotStartedError: status.HTTP_409_CONFLICT,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    ReceiptNotFoundError: status.HTTP_404_NOT_FOUND,
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "IDENTITY_MISSING": "Open the mini-app from Telegram or add ?tid=<telegram_id> to the URL.",
    "OPERATOR_NOT_FOUND": "This Telegram ID is not registered as a sales rep. Ask an administrator to add it.",
    "OPERATOR_LOOKUP_FAILED": "The backend could not be reached. Retry later.",
    "CATALOG_LOAD_FAILED": "Products could not be loaded. Retry starting the session.",
    "ORDER_SUBMISSION_FAILED": "The order was not accepted. The cart is kept; retry the checkout.",
    "PAYLOAD_CONTRACT_VIOLATION": "The order could not be encoded. Check quantities and prices in the cart.",
    "BACKEND_URL_MISSING": "Set BACKEND_BASE_URL to the backend address.",
    "MISSING_STORE": "Pick a store with PUT /api/cart/store.",
    "EMPTY_CART": "Add products with POST /api/cart/items.",
    "UNRESOLVED_LINE_ITEM": "Remove the line from the cart and add the product again.",
    "MISSING_OPERATOR": "Restart the session from Telegram.",
    "INVALID_QUANTITY": "Quantities must be whole numbers of at least 1.",
    "INVALID_PRICE": "Prices must be non-negative numbers.",
    "SUBMISSION_IN_PROGRESS": "Wait for the current submission to finish.",
    "SESSION_NOT_STARTED": "Start a session with POST /api/session first.",
    "PRODUCT_NOT_FOUND": "Check the product ID against GET /api/catalog/products.",
    "RECEIPT_NOT_FOUND": "Receipts are issued for cash orders only.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current session state.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "The backend failed to answer. Retry later.",
    503: "The service is not configured. Check server settings.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _detail_for(exc: Exception) -> Any:
    if isinstance(exc, GatewayError):
        return exc.detail
    if isinstance(exc, IdistrError):
        return exc.details or None
    return None


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception to the standardized JSON error response."""
    status_code = _status_for(exc)
    error_code = exc.code if isinstance(exc, IdistrError) else exc.__class__.__name__
    message = exc.message if isinstance(exc, IdistrError) else str(exc)
    request_id = getattr(request.state, "request_id", None)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code == 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        detail=_detail_for(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches anything the exception handlers did not and converts it to a
    standardized JSON error response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(IdistrError)
    async def domain_exception_handler(
        request: Request,
        exc: IdistrError,
    ) -> JSONResponse:
        """Handle application errors."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint=HINT_MAP["VALIDATION_ERROR"],
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )
