"""
API tests for watchlist and market endpoints.

Tests cover:
- Watchlist add (including duplicates), list and remove
- Quote lookup and two-symbol comparison
- Health and root endpoints
"""

from decimal import Decimal

from fastapi.testclient import TestClient


class TestWatchlistAPI:
    """Tests for /watchlist endpoints."""

    def test_add_and_list(self, client: TestClient):
        response = client.post("/watchlist", json={"symbol": "nvda"})

        assert response.status_code == 201
        assert response.json()["added"] is True
        assert [w["symbol"] for w in client.get("/watchlist").json()] == ["NVDA"]

    def test_duplicate_add_is_noop(self, client: TestClient):
        first = client.post("/watchlist", json={"symbol": "NVDA"}).json()

        second = client.post("/watchlist", json={"symbol": " nvda "}).json()

        assert second["added"] is False
        assert second["item"]["item_id"] == first["item"]["item_id"]
        assert len(client.get("/watchlist").json()) == 1

    def test_remove(self, client: TestClient):
        item = client.post("/watchlist", json={"symbol": "NVDA"}).json()["item"]

        response = client.delete(f"/watchlist/{item['item_id']}")

        assert response.status_code == 200
        assert client.get("/watchlist").json() == []

    def test_remove_unknown_returns_404(self, client: TestClient):
        assert client.delete("/watchlist/missing").status_code == 404


class TestMarketAPI:
    """Tests for /market endpoints."""

    def test_quote(self, client: TestClient):
        response = client.get("/market/quote/aapl")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert Decimal(data["price"]) == Decimal("185.50")
        assert data["volume"] == 50_000_000

    def test_quote_unavailable_returns_503(self, client: TestClient):
        response = client.get("/market/quote/ZZZZ")

        assert response.status_code == 503
        assert response.json()["error"] == "FEED_UNAVAILABLE"

    def test_compare(self, client: TestClient):
        response = client.get("/market/compare", params={"left": "AAPL", "right": "MSFT"})

        assert response.status_code == 200
        data = response.json()
        assert data["price_winner"] == "MSFT"
        assert data["market_cap_winner"] == "AAPL"
        assert data["left"]["symbol"] == "AAPL"

    def test_compare_requires_both_symbols(self, client: TestClient):
        assert client.get("/market/compare", params={"left": "AAPL"}).status_code == 422


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root(client: TestClient):
    data = client.get("/").json()

    assert data["app"] == "StockScope"
    assert data["docs"] == "/docs"
