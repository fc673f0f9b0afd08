"""Tests for ManageCartUseCase."""

import pytest

from idistr.application.session import PosSession
from idistr.application.use_cases import ManageCartUseCase
from idistr.core.exceptions import MissingStoreError, ProductNotFoundError
from idistr.core.services import CartLedger, CatalogCache


@pytest.fixture
def use_case(ledger: CartLedger, catalog: CatalogCache) -> ManageCartUseCase:
    return ManageCartUseCase(PosSession("U1", ledger, catalog))


class TestManageCartUseCase:
    async def test_add_item_from_catalog(self, use_case: ManageCartUseCase):
        line = await use_case.add_item("P3", "2")
        assert line.price == 2500.5
        assert use_case.to_response().total == 5001

    async def test_add_unknown_product(self, use_case: ManageCartUseCase):
        with pytest.raises(ProductNotFoundError):
            await use_case.add_item("P404")

    async def test_update_missing_line(self, use_case: ManageCartUseCase):
        with pytest.raises(ProductNotFoundError):
            await use_case.update_item("P1", 3)

    async def test_select_unknown_store(self, use_case: ManageCartUseCase):
        with pytest.raises(MissingStoreError):
            await use_case.select_store("S404")

    async def test_response_shape(self, use_case: ManageCartUseCase):
        await use_case.add_item("P1", 2)
        await use_case.select_store("S2")
        use_case.set_note("позвонить")
        response = use_case.to_response()
        assert response.count == 1
        assert response.lines[0].subtotal == 200
        assert response.store_id == "S2"
        assert response.note == "позвонить"
