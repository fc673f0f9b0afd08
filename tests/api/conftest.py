"""Fixtures for API tests: app with mocked backend and in-memory state."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from idistr.api.dependencies import (
    get_gateway,
    get_outbox,
    get_receipt_generator,
    get_registry,
)
from idistr.api.main import app
from idistr.application.session import SessionRegistry
from idistr.core.entities import OrderResult, Rep
from idistr.core.interfaces import RepProfile
from idistr.core.services import ReceiptGenerator
from idistr.infrastructure.receipts import HtmlReceiptRenderer, ReceiptOutbox
from idistr.infrastructure.storage import MemoryStateStore

OVERRIDDEN = (get_gateway, get_registry, get_outbox, get_receipt_generator)


@pytest.fixture
def mock_gateway(stores, products):
    gateway = AsyncMock()
    gateway.get_rep.return_value = RepProfile(rep=Rep(id="9", name="Айдар"), stores=stores)
    gateway.fetch_catalog.return_value = products
    gateway.create_order.return_value = OrderResult(order_id="1001")
    return gateway


@pytest.fixture
def registry(state_store: MemoryStateStore) -> SessionRegistry:
    return SessionRegistry(store=state_store, namespace="idistr")


@pytest.fixture
def outbox() -> ReceiptOutbox:
    return ReceiptOutbox()


@pytest.fixture
async def api_client(mock_gateway, registry, outbox) -> AsyncGenerator[AsyncClient, None]:
    generator = ReceiptGenerator(HtmlReceiptRenderer(), outbox)
    app.dependency_overrides[get_gateway] = lambda: mock_gateway
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_outbox] = lambda: outbox
    app.dependency_overrides[get_receipt_generator] = lambda: generator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in OVERRIDDEN:
        app.dependency_overrides.pop(dependency, None)


@pytest.fixture
async def started_client(api_client: AsyncClient) -> AsyncClient:
    """Client with a session started for operator U1."""
    response = await api_client.post("/api/session", params={"tid": "U1"})
    assert response.status_code == 200
    return api_client
