"""Tests for cart endpoints."""

from httpx import AsyncClient

TID = {"tid": "U1"}


class TestCartAPI:
    async def test_add_and_accumulate(self, started_client: AsyncClient):
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P1", "qty": 1})
        response = await started_client.post(
            "/api/cart/items", params=TID, json={"product_id": "P1", "qty": 5}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["count"] == 1
        assert data["lines"][0]["qty"] == 6
        assert data["total"] == 600

    async def test_add_unknown_product(self, started_client: AsyncClient):
        response = await started_client.post(
            "/api/cart/items", params=TID, json={"product_id": "P404"}
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    async def test_update_clamps_quantity(self, started_client: AsyncClient):
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P2", "qty": 4})
        response = await started_client.patch("/api/cart/items/P2", params=TID, json={"qty": -3})
        assert response.json()["lines"][0]["qty"] == 1

    async def test_remove_and_clear(self, started_client: AsyncClient):
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P1"})
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P2"})
        response = await started_client.delete("/api/cart/items/P1", params=TID)
        assert [line["id"] for line in response.json()["lines"]] == ["P2"]

        response = await started_client.delete("/api/cart", params=TID)
        assert response.json()["lines"] == []

    async def test_select_store_and_note(self, started_client: AsyncClient):
        response = await started_client.put("/api/cart/store", params=TID, json={"store_id": "S1"})
        assert response.json()["store_id"] == "S1"

        response = await started_client.put("/api/cart/note", params=TID, json={"note": "у входа"})
        assert response.json()["note"] == "у входа"

    async def test_select_unknown_store(self, started_client: AsyncClient):
        response = await started_client.put("/api/cart/store", params=TID, json={"store_id": "S404"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "MISSING_STORE"

    async def test_other_operator_has_no_session(self, started_client: AsyncClient):
        response = await started_client.get("/api/cart", params={"tid": "U2"})
        assert response.status_code == 409
