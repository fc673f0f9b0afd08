"""Tests for catalog endpoints."""

from httpx import AsyncClient

from idistr.core.entities import FALLBACK_IMAGE_URL

TID = {"tid": "U1"}


class TestCatalogAPI:
    async def test_requires_session(self, api_client: AsyncClient):
        response = await api_client.get("/api/catalog/products", params=TID)
        assert response.status_code == 409

    async def test_search_products(self, started_client: AsyncClient):
        response = await started_client.get(
            "/api/catalog/products", params={**TID, "q": "мол"}
        )
        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data] == ["P1"]
        assert data[0]["image_url"] == FALLBACK_IMAGE_URL

    async def test_filter_by_category(self, started_client: AsyncClient):
        response = await started_client.get(
            "/api/catalog/products", params={**TID, "category": "Молочка"}
        )
        assert [p["id"] for p in response.json()] == ["P1", "P3"]

    async def test_stores_and_categories(self, started_client: AsyncClient):
        stores = await started_client.get("/api/catalog/stores", params={**TID, "q": "mini"})
        assert [s["id"] for s in stores.json()] == ["S2"]
        categories = await started_client.get("/api/catalog/categories", params=TID)
        assert categories.json() == ["Все", "Молочка", "Выпечка"]

    async def test_recent_products(self, started_client: AsyncClient):
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P2"})
        await started_client.post("/api/cart/items", params=TID, json={"product_id": "P1"})
        response = await started_client.get("/api/catalog/recent", params=TID)
        assert [p["id"] for p in response.json()] == ["P1", "P2"]
