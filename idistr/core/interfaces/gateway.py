"""
Abstract interface for the backend order service.

Defines the response contracts of the three backend operations used by
the mini-app: operator lookup, catalog fetch and order creation.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from idistr.core.entities import OrderDraft, OrderResult, PaymentMethod, Product, Rep, Store


class OrderItemContract(BaseModel):
    """Wire contract of one order line."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    qty: int = Field(..., ge=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)


class PaymentContract(BaseModel):
    """Wire contract of the payment block."""

    model_config = ConfigDict(extra="forbid")

    method: PaymentMethod
    txn: str = ""


class CreateOrderPayload(BaseModel):
    """Wire contract of the order creation body, checked before sending."""

    model_config = ConfigDict(extra="forbid")

    telegram_id: str = Field(..., min_length=1)
    store_id: str = Field(..., min_length=1)
    items: list[OrderItemContract] = Field(..., min_length=1)
    payment: PaymentContract
    note: str = ""


class RepProfile(BaseModel):
    """Response of the operator lookup: the rep and the stores assigned to them."""

    rep: Rep | None = Field(default=None, description="Sales rep record")
    stores: list[Store] = Field(default_factory=list, description="Stores served by the rep")


class ProductPage(BaseModel):
    """One page of the product listing."""

    items: list[Product] = Field(default_factory=list, description="Products on this page")


class IOrderGateway(ABC):
    """
    Abstract interface for the backend REST service.

    Implementations raise ``GatewayError`` subclasses carrying the HTTP
    status and the server-provided detail.
    """

    @abstractmethod
    async def get_rep(self, telegram_id: str) -> RepProfile:
        """
        Look up the rep registered under the operator identifier.

        Raises:
            OperatorNotFoundError: The backend does not know the identifier.
            OperatorLookupError: Network or server failure.
        """

    @abstractmethod
    async def list_products(
        self,
        search: str = "",
        page: int = 1,
        limit: int = 100,
    ) -> ProductPage:
        """
        Fetch one page of products.

        Raises:
            CatalogLoadError: Network, server or contract failure.
        """

    @abstractmethod
    async def fetch_catalog(self) -> list[Product]:
        """
        Fetch the whole product list, page by page.

        Raises:
            CatalogLoadError: Network, server or contract failure.
        """

    @abstractmethod
    async def create_order(self, draft: OrderDraft) -> OrderResult:
        """
        Submit an order. Never retried automatically.

        Raises:
            PayloadContractError: The draft violates the wire contract.
            OrderSubmissionError: Network failure or server rejection.
        """
