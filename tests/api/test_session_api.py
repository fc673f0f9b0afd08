"""Tests for session endpoints."""

import json
from urllib.parse import urlencode

from httpx import AsyncClient

from idistr.core.exceptions import OperatorLookupError, OperatorNotFoundError


class TestStartSession:
    async def test_start_with_tid(self, api_client: AsyncClient, mock_gateway):
        response = await api_client.post("/api/session", params={"tid": "U1"})
        assert response.status_code == 200
        data = response.json()
        assert data["operator_id"] == "U1"
        assert data["rep"]["name"] == "Айдар"
        assert data["products_count"] == 3
        assert data["cart"]["lines"] == []
        mock_gateway.get_rep.assert_awaited_once_with("U1")

    async def test_start_with_init_data_header(self, api_client: AsyncClient, mock_gateway):
        init_data = urlencode({"user": json.dumps({"id": 4242}), "hash": "x"})
        response = await api_client.post(
            "/api/session", headers={"X-Telegram-Init-Data": init_data}
        )
        assert response.status_code == 200
        assert response.json()["operator_id"] == "4242"

    async def test_missing_identity(self, api_client: AsyncClient):
        response = await api_client.post("/api/session")
        assert response.status_code == 401
        assert response.json()["error_code"] == "IDENTITY_MISSING"

    async def test_unknown_rep(self, api_client: AsyncClient, mock_gateway):
        mock_gateway.get_rep.side_effect = OperatorNotFoundError(
            "reps/me failed", status=404, detail="Rep not found"
        )
        response = await api_client.post("/api/session", params={"tid": "U404"})
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "OPERATOR_NOT_FOUND"
        assert data["detail"] == "Rep not found"
        assert data["hint"]

    async def test_backend_down(self, api_client: AsyncClient, mock_gateway):
        mock_gateway.get_rep.side_effect = OperatorLookupError("reps/me failed", status=503)
        response = await api_client.post("/api/session", params={"tid": "U1"})
        assert response.status_code == 502


class TestResetSession:
    async def test_reset_clears_cart(self, started_client: AsyncClient):
        await started_client.post("/api/cart/items", params={"tid": "U1"}, json={"product_id": "P1"})
        response = await started_client.post("/api/session/reset", params={"tid": "U1"})
        assert response.status_code == 200
        assert response.json() == {"operator_id": "U1", "reset": True}

        cart = await started_client.get("/api/cart", params={"tid": "U1"})
        assert cart.status_code == 409
        assert cart.json()["error_code"] == "SESSION_NOT_STARTED"

        restarted = await started_client.post("/api/session", params={"tid": "U1"})
        assert restarted.json()["cart"]["lines"] == []
