"""
API tests for market data and market control.

Tests cover:
- Bucket listing and quotes
- Pause (423) and resume
- Price override served immediately
- Unknown bucket (404)
- Control endpoints are admin-only
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from brokerage.domain.markets import MARKET_BUCKETS

from tests.conftest import assert_decimal_equal


class TestMarketsAPI:
    """Tests for /api/markets endpoints."""

    def test_list_buckets(self, client: TestClient, api_user):
        _, headers = api_user

        response = client.get("/api/markets", headers=headers)

        assert response.status_code == 200
        assert set(response.json()["buckets"]) == set(MARKET_BUCKETS)

    def test_get_quotes(self, client: TestClient, api_user):
        _, headers = api_user

        response = client.get("/api/markets/us", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["bucket"] == "us"
        assert data["as_of"]
        assert len(data["quotes"]) == len(MARKET_BUCKETS["us"])
        assert data["quotes"][0]["symbol"] == "AAPL"
        assert_decimal_equal(data["quotes"][0]["price"], Decimal("185.50"))

    def test_large_bucket_is_capped(self, client: TestClient, api_user):
        _, headers = api_user

        response = client.get("/api/markets/bist", headers=headers)

        assert len(response.json()["quotes"]) == 15

    def test_unknown_bucket_is_404(self, client: TestClient, api_user):
        _, headers = api_user

        response = client.get("/api/markets/moon", headers=headers)

        assert response.status_code == 404

    def test_requires_token(self, client: TestClient):
        assert client.get("/api/markets/us").status_code == 401


class TestMarketControlAPI:
    """Tests for /api/admin/markets/control."""

    def test_pause_then_resume(self, client: TestClient, api_user, api_admin):
        """
        GIVEN "us" quotes already cached
        WHEN an admin pauses "us"
        THEN readers get 423 until it is resumed
        """
        _, user_headers = api_user
        _, admin_headers = api_admin
        assert client.get("/api/markets/us", headers=user_headers).status_code == 200

        paused = client.post("/api/admin/markets/control", headers=admin_headers, json={
            "bucket": "us",
            "active": False,
        })

        assert paused.status_code == 200
        assert paused.json()["paused_at"] is not None
        blocked = client.get("/api/markets/us", headers=user_headers)
        assert blocked.status_code == 423
        assert blocked.json()["error"] == "MARKET_PAUSED"

        client.post("/api/admin/markets/control", headers=admin_headers, json={
            "bucket": "us",
            "active": True,
        })
        assert client.get("/api/markets/us", headers=user_headers).status_code == 200

    def test_override_applies_immediately(self, client: TestClient, api_user, api_admin):
        _, user_headers = api_user
        _, admin_headers = api_admin
        client.get("/api/markets/crypto", headers=user_headers)

        client.post("/api/admin/markets/control", headers=admin_headers, json={
            "bucket": "crypto",
            "active": True,
            "price_override": "1.00",
        })
        data = client.get("/api/markets/crypto", headers=user_headers).json()

        assert {Decimal(q["price"]) for q in data["quotes"]} == {Decimal("1.00")}

    def test_paused_bucket_does_not_block_orders(self, client: TestClient, api_user, api_admin):
        _, user_headers = api_user
        _, admin_headers = api_admin
        client.post("/api/admin/markets/control", headers=admin_headers, json={
            "bucket": "us",
            "active": False,
        })

        response = client.post("/api/trades/order", headers=user_headers, json={
            "bucket": "us",
            "symbol": "AAPL",
            "side": "buy",
            "quantity": 1,
            "price": 100,
        })

        assert response.status_code == 201

    def test_list_controls(self, client: TestClient, api_admin):
        _, admin_headers = api_admin
        for bucket in ("fx", "us"):
            client.post("/api/admin/markets/control", headers=admin_headers, json={
                "bucket": bucket,
                "active": False,
            })

        response = client.get("/api/admin/markets/control", headers=admin_headers)

        assert response.status_code == 200
        assert [c["bucket"] for c in response.json()["controls"]] == ["fx", "us"]

    def test_negative_override_is_400(self, client: TestClient, api_admin):
        _, admin_headers = api_admin

        response = client.post("/api/admin/markets/control", headers=admin_headers, json={
            "bucket": "fx",
            "active": True,
            "price_override": -1,
        })

        assert response.status_code == 400

    def test_user_cannot_control(self, client: TestClient, api_user):
        _, headers = api_user

        response = client.post("/api/admin/markets/control", headers=headers, json={
            "bucket": "us",
            "active": False,
        })

        assert response.status_code == 403
