"""
Domain exceptions for the IDISTR application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class IdistrError(Exception):
    """Base exception for all IDISTR errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(IdistrError):
    """Configuration error."""

    pass


class IdentityMissingError(IdistrError):
    """No operator identity could be resolved from the host or the URL."""

    def __init__(self) -> None:
        super().__init__(
            "Operator identity is missing: open the mini-app from the chat host "
            "or add ?tid=<telegram_id> to the address",
            code="IDENTITY_MISSING",
        )


# Gateway Exceptions
class GatewayError(IdistrError):
    """
    Base exception for backend requests.

    Carries the HTTP status (0 when no response was received), the
    server-provided detail payload and the request URL.
    """

    default_code = "GATEWAY_ERROR"

    def __init__(
        self,
        message: str,
        status: int = 0,
        detail: Any = None,
        url: str | None = None,
        code: str | None = None,
    ):
        super().__init__(
            message,
            code=code or self.default_code,
            details={"status": status, "detail": detail, "url": url},
        )
        self.status = status
        self.detail = detail
        self.url = url

    @classmethod
    def wrap(cls, error: "GatewayError", message: str) -> "GatewayError":
        """Re-raise a transport-level error as an operation-specific one."""
        return cls(message, status=error.status, detail=error.detail, url=error.url)


class OperatorNotFoundError(GatewayError):
    """The backend has no sales rep provisioned for the identifier."""

    default_code = "OPERATOR_NOT_FOUND"


class OperatorLookupError(GatewayError):
    """Operator lookup failed for a reason other than a missing rep."""

    default_code = "OPERATOR_LOOKUP_FAILED"


class CatalogLoadError(GatewayError):
    """Products could not be loaded."""

    default_code = "CATALOG_LOAD_FAILED"


class OrderSubmissionError(GatewayError):
    """The backend rejected the order or could not be reached."""

    default_code = "ORDER_SUBMISSION_FAILED"


class PayloadContractError(GatewayError):
    """An outgoing payload violates the backend contract; nothing was sent."""

    default_code = "PAYLOAD_CONTRACT_VIOLATION"


# Order validation Exceptions
class OrderValidationError(IdistrError):
    """Base exception for order preconditions checked before submission."""

    pass


class MissingStoreError(OrderValidationError):
    """No store selected, or the selection is not in the catalog."""

    def __init__(self, store_id: Any = None):
        super().__init__(
            "Select a store before submitting the order",
            code="MISSING_STORE",
            details={"store_id": store_id},
        )


class EmptyCartError(OrderValidationError):
    """The cart has no lines."""

    def __init__(self) -> None:
        super().__init__("The cart is empty", code="EMPTY_CART")


class UnresolvedLineItemError(OrderValidationError):
    """A cart line could not be matched to a catalog product."""

    def __init__(self, sku: str | None, title: str | None):
        label = title or sku or "unknown product"
        super().__init__(
            f"Could not determine the product for '{label}'. "
            "Remove it from the cart and add it again.",
            code="UNRESOLVED_LINE_ITEM",
            details={"sku": sku, "title": title},
        )


class MissingOperatorError(OrderValidationError):
    """No operator identifier is available for the order."""

    def __init__(self) -> None:
        super().__init__(
            "Operator identifier is missing",
            code="MISSING_OPERATOR",
        )


class InvalidQuantityError(OrderValidationError):
    """A line quantity is not a positive integer."""

    def __init__(self, product_id: str | None, quantity: Any):
        super().__init__(
            f"Invalid quantity for product {product_id}: {quantity!r}",
            code="INVALID_QUANTITY",
            details={"product_id": product_id, "quantity": str(quantity)[:50]},
        )


class InvalidPriceError(OrderValidationError):
    """A line price is not a non-negative number."""

    def __init__(self, product_id: str | None, price: Any):
        super().__init__(
            f"Invalid price for product {product_id}: {price!r}",
            code="INVALID_PRICE",
            details={"product_id": product_id, "price": str(price)[:50]},
        )


# Session Exceptions
class SessionError(IdistrError):
    """Base exception for operator session state."""

    pass


class SessionNotStartedError(SessionError):
    """No session has been started for the operator."""

    def __init__(self, operator_id: str):
        super().__init__(
            f"No active session for operator {operator_id}",
            code="SESSION_NOT_STARTED",
            details={"operator_id": operator_id},
        )


class SubmissionInProgressError(SessionError):
    """An order submission is already in flight."""

    def __init__(self) -> None:
        super().__init__(
            "An order is already being submitted",
            code="SUBMISSION_IN_PROGRESS",
        )


class ProductNotFoundError(SessionError):
    """Product id is not in the loaded catalog."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class ReceiptNotFoundError(IdistrError):
    """No printable receipt is held for the order."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Receipt not found: {order_id}",
            code="RECEIPT_NOT_FOUND",
            details={"order_id": order_id},
        )
