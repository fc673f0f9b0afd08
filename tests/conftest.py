"""Pytest configuration and shared fixtures."""

from collections.abc import Generator

import pytest

from idistr.application.services import reset_services
from idistr.config import reset_settings
from idistr.core.entities import Product, Store
from idistr.core.services import CartLedger, CatalogCache
from idistr.infrastructure.gateway import reset_order_gateway
from idistr.infrastructure.receipts import reset_receipts
from idistr.infrastructure.storage import MemoryStateStore, reset_state_store


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Drop process-wide singletons between tests."""
    yield
    reset_services()
    reset_order_gateway()
    reset_receipts()
    reset_state_store()
    reset_settings()


@pytest.fixture
def stores() -> list[Store]:
    return [
        Store(
            id="S1",
            name="Магазин Алма",
            address="ул. Абая 1",
            bin_iin="123456789012",
            phone="+77010000001",
        ),
        Store(id="S2", name="Mini Market", address="Dostyk 5"),
    ]


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id="P1", title="Молоко 1л", sku="MLK-1", unit="шт", category="Молочка", price=100),
        Product(id="P2", title="Хлеб белый", sku="BRD-1", unit="шт", category="Выпечка", price=150),
        Product(id="P3", title="Сыр", sku="CHS-1", unit="кг", category="Молочка", price=2500.5),
    ]


@pytest.fixture
def catalog(stores: list[Store], products: list[Product]) -> CatalogCache:
    cache = CatalogCache()
    cache.populate(stores, products)
    return cache


@pytest.fixture
def state_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
async def ledger(state_store: MemoryStateStore) -> CartLedger:
    cart = CartLedger(state_store, namespace="test")
    await cart.load()
    return cart
