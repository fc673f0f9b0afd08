"""Tests for checkout and receipt endpoints."""

from httpx import AsyncClient

from idistr.core.exceptions import OrderSubmissionError

TID = {"tid": "U1"}


async def _fill_cart(client: AsyncClient) -> None:
    await client.post("/api/cart/items", params=TID, json={"product_id": "P1", "qty": 2})
    await client.put("/api/cart/store", params=TID, json={"store_id": "S1"})


class TestCheckoutAPI:
    async def test_cash_checkout_issues_receipt(self, started_client: AsyncClient, mock_gateway):
        await _fill_cart(started_client)
        response = await started_client.post("/api/checkout", params=TID, json={"method": "Cash"})
        assert response.status_code == 201
        data = response.json()
        assert data["order_id"] == "1001"
        assert data["state"] == "succeeded"
        assert data["total"] == 200
        assert data["receipt_url"] == "/api/receipts/1001"

        draft = mock_gateway.create_order.await_args.args[0]
        assert draft.to_payload()["items"] == [{"id": "P1", "qty": 2, "price": 100.0}]

        receipt = await started_client.get(data["receipt_url"])
        assert receipt.status_code == 200
        assert receipt.headers["content-type"].startswith("text/html")
        assert "Заказ №: 1001" in receipt.text

        cart = await started_client.get("/api/cart", params=TID)
        assert cart.json()["lines"] == []

    async def test_cash_receipt_shows_slip_reference(self, started_client: AsyncClient):
        await _fill_cart(started_client)
        response = await started_client.post(
            "/api/checkout", params=TID, json={"method": "Cash", "txn": "SLIP-777"}
        )
        receipt = await started_client.get(response.json()["receipt_url"])
        assert "Чек: SLIP-777" in receipt.text

    async def test_card_checkout_without_receipt(self, started_client: AsyncClient):
        await _fill_cart(started_client)
        response = await started_client.post(
            "/api/checkout", params=TID, json={"method": "Card", "txn": "RRN-55"}
        )
        assert response.json()["receipt_url"] is None
        receipt = await started_client.get("/api/receipts/1001")
        assert receipt.status_code == 404

    async def test_empty_cart(self, started_client: AsyncClient):
        await started_client.put("/api/cart/store", params=TID, json={"store_id": "S1"})
        response = await started_client.post("/api/checkout", params=TID, json={})
        assert response.status_code == 400
        assert response.json()["error_code"] == "EMPTY_CART"

    async def test_missing_store(self, started_client: AsyncClient):
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P1"})
        response = await started_client.post("/api/checkout", params=TID, json={})
        assert response.json()["error_code"] == "MISSING_STORE"

    async def test_invalid_method(self, started_client: AsyncClient):
        response = await started_client.post("/api/checkout", params=TID, json={"method": "Bitcoin"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_backend_rejection_keeps_cart(self, started_client: AsyncClient, mock_gateway):
        await _fill_cart(started_client)
        mock_gateway.create_order.side_effect = OrderSubmissionError(
            "order failed", status=422, detail={"items": "stock exhausted"}
        )
        response = await started_client.post("/api/checkout", params=TID, json={})
        assert response.status_code == 502
        data = response.json()
        assert data["error_code"] == "ORDER_SUBMISSION_FAILED"
        assert data["detail"] == {"items": "stock exhausted"}

        cart = await started_client.get("/api/cart", params=TID)
        assert cart.json()["count"] == 1

    async def test_status_after_checkout(self, started_client: AsyncClient):
        before = await started_client.get("/api/checkout/status", params=TID)
        assert before.json() == {"state": "idle", "last_order_id": None}

        await _fill_cart(started_client)
        await started_client.post("/api/checkout", params=TID, json={})
        after = await started_client.get("/api/checkout/status", params=TID)
        assert after.json() == {"state": "succeeded", "last_order_id": "1001"}
