"""
HTTP client for the IDISTR backend REST API.

Wraps the three backend operations the mini-app needs (operator lookup,
product listing, order creation). Every failure is normalized into a
``GatewayError`` subclass carrying the HTTP status, the server-provided
detail and the URL, so callers can tell failure classes apart without
inspecting transport exceptions.

Idempotent GET requests are retried on transport errors and 5xx responses
with exponential backoff. Order creation is sent exactly once.
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from idistr.config import get_logger, get_settings
from idistr.core.entities import OrderDraft, OrderResult, Product
from idistr.core.exceptions import (
    CatalogLoadError,
    ConfigurationError,
    GatewayError,
    OperatorLookupError,
    OperatorNotFoundError,
    OrderSubmissionError,
    PayloadContractError,
)
from idistr.core.interfaces.gateway import (
    CreateOrderPayload,
    IOrderGateway,
    ProductPage,
    RepProfile,
)

logger = get_logger(__name__)

T = TypeVar("T")

REPS_ME_PATH = "/v1/reps/me"
PRODUCTS_PATH = "/v1/products"
ORDERS_PATH = "/v1/orders"


@dataclass
class JsonResponse:
    """Decoded 2xx response."""

    status: int
    url: str
    data: Any


def extract_detail(response: httpx.Response) -> Any:
    """
    Pull the error detail out of a failed response.

    FastAPI-style ``{"detail": ...}`` bodies give their ``detail`` value;
    other JSON bodies are returned whole; non-JSON bodies give their text.
    """
    try:
        data = response.json()
    except ValueError:
        return response.text or None
    if isinstance(data, dict) and data.get("detail") is not None:
        return data["detail"]
    return data


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, GatewayError) and (exc.status == 0 or exc.status >= 500)


class HttpOrderGateway(IOrderGateway):
    """
    httpx implementation of the backend gateway.

    Features:
    - Base URL checked before every request (missing -> ConfigurationError)
    - Empty query values dropped from the URL
    - Retry with exponential backoff for GET requests
    - Response bodies validated against the pydantic contracts
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        page_limit: int | None = None,
        max_pages: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self._base_url = base_url if base_url is not None else settings.backend.base_url
        self._timeout = timeout if timeout is not None else settings.backend.timeout
        self._max_retries = max_retries if max_retries is not None else settings.backend.max_retries
        self._retry_delay = retry_delay if retry_delay is not None else settings.backend.retry_delay
        self._retry_multiplier = settings.backend.retry_multiplier
        self._page_limit = page_limit or settings.catalog.page_limit
        self._max_pages = max_pages or settings.catalog.max_pages
        self._transport = transport

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _require_base_url(self) -> str:
        base_url = (self._base_url or "").strip()
        if not base_url:
            raise ConfigurationError(
                "Backend base URL is not configured. Set BACKEND_BASE_URL "
                "(e.g. https://idistr-backend.onrender.com).",
                code="BACKEND_URL_MISSING",
            )
        return base_url.rstrip("/")

    async def _request_json(
        self,
        method: str,
        path: str,
        query: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> JsonResponse:
        """Send one request and decode a 2xx JSON body."""
        base_url = self._require_base_url()
        params = {
            k: str(v) for k, v in (query or {}).items() if v is not None and v != ""
        }
        url = f"{base_url}{path}"
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, params=params, json=body)
        except httpx.HTTPError as e:
            logger.warning("backend_unreachable", method=method, path=path, error=str(e))
            raise GatewayError(
                f"Request failed @ {path}: {e.__class__.__name__}",
                status=0,
                detail=str(e) or None,
                url=url,
            ) from e

        elapsed_ms = int((time.time() - start_time) * 1000)
        request_url = str(response.request.url)

        if not response.is_success:
            logger.warning(
                "backend_request_failed",
                method=method,
                path=path,
                status=response.status_code,
                elapsed_ms=elapsed_ms,
            )
            raise GatewayError(
                f"Request failed {response.status_code} {response.reason_phrase} @ {path}",
                status=response.status_code,
                detail=extract_detail(response),
                url=request_url,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(
                f"Invalid JSON response @ {path}",
                status=response.status_code,
                detail=response.text[:200] or None,
                url=request_url,
            ) from e

        logger.info(
            "backend_request",
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=elapsed_ms,
        )
        return JsonResponse(status=response.status_code, url=request_url, data=data)

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        return retry(
            stop=stop_after_attempt(max(1, self._max_retries)),
            wait=wait_exponential(
                multiplier=self._retry_delay,
                min=self._retry_delay,
                max=self._retry_delay * (self._retry_multiplier**3),
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        """Log retry attempts."""
        logger.warning(
            "backend_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _with_retry(self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        return await self._get_retry_decorator()(operation)(*args, **kwargs)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_rep(self, telegram_id: str) -> RepProfile:
        """Look up the rep and their stores."""
        try:
            response = await self._with_retry(
                self._request_json,
                "GET",
                REPS_ME_PATH,
                query={"telegram_id": telegram_id},
            )
        except GatewayError as e:
            if 400 <= e.status < 500:
                raise OperatorNotFoundError.wrap(e, "reps/me failed") from e
            raise OperatorLookupError.wrap(e, "reps/me failed") from e

        try:
            return RepProfile.model_validate(response.data)
        except PydanticValidationError as e:
            raise OperatorLookupError(
                "reps/me returned an unexpected body",
                status=response.status,
                detail=str(e),
                url=response.url,
            ) from e

    async def list_products(
        self,
        search: str = "",
        page: int = 1,
        limit: int = 100,
    ) -> ProductPage:
        """Fetch one page of products."""
        try:
            response = await self._with_retry(
                self._request_json,
                "GET",
                PRODUCTS_PATH,
                query={"search": search, "page": page, "limit": limit},
            )
        except GatewayError as e:
            raise CatalogLoadError.wrap(e, "products failed") from e

        data = response.data
        if isinstance(data, list):
            data = {"items": data}
        try:
            return ProductPage.model_validate(data)
        except PydanticValidationError as e:
            raise CatalogLoadError(
                "products returned an unexpected body",
                status=response.status,
                detail=str(e),
                url=response.url,
            ) from e

    async def fetch_catalog(self) -> list[Product]:
        """Fetch all products, following pages until a short or repeated page."""
        products: dict[str, Product] = {}

        for page_number in range(1, self._max_pages + 1):
            page = await self.list_products(page=page_number, limit=self._page_limit)
            new_items = [p for p in page.items if p.id not in products]
            for product in new_items:
                products[product.id] = product

            if len(page.items) < self._page_limit or not new_items:
                break
        else:
            logger.warning("catalog_page_limit_reached", max_pages=self._max_pages)

        logger.info("catalog_fetched", products=len(products))
        return list(products.values())

    async def create_order(self, draft: OrderDraft) -> OrderResult:
        """Validate the payload contract and submit the order once."""
        try:
            payload = CreateOrderPayload.model_validate(draft.to_payload())
        except PydanticValidationError as e:
            raise PayloadContractError(
                "order payload violates the backend contract",
                status=0,
                detail=str(e),
            ) from e

        try:
            response = await self._request_json(
                "POST",
                ORDERS_PATH,
                body=payload.model_dump(mode="json"),
            )
        except GatewayError as e:
            raise OrderSubmissionError.wrap(e, "order failed") from e

        try:
            result = OrderResult.model_validate(response.data)
        except PydanticValidationError as e:
            raise OrderSubmissionError(
                "order response has no order_id",
                status=response.status,
                detail=str(e),
                url=response.url,
            ) from e

        logger.info(
            "order_created",
            order_id=result.order_id,
            store_id=draft.store_id,
            items=len(draft.items),
        )
        return result
