"""
HTTP surface tests: FastAPI TestClient over services wired with the fake provider.
"""

import pytest
from fastapi.testclient import TestClient

from marketminds.infrastructure.config import Settings
from marketminds.infrastructure.entrypoints.bootstrap import build_services
from marketminds.infrastructure.entrypoints.fastapi_app import create_app
from marketminds.infrastructure.observability.langfuse_adapter import NullObservabilityHandler
from marketminds.infrastructure.persistence.in_memory_message_store import InMemoryMessageStore


@pytest.fixture
def client(provider):
    services = build_services(
        Settings(),
        provider=provider,
        store=InMemoryMessageStore(),
        observability=NullObservabilityHandler(),
    )
    with TestClient(create_app(services, start_polling=False)) as test_client:
        yield test_client


class TestMarketRoutes:
    """Quotes, categories, search, history and news."""

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}

    def test_error_body_is_documented(self, client: TestClient) -> None:
        schemas = client.get("/openapi.json").json()["components"]["schemas"]
        assert set(schemas["ErrorResponse"]["properties"]) == {"error", "detail"}

    def test_quotes(self, client: TestClient) -> None:
        response = client.get("/quotes", params={"symbols": "aapl,MSFT,aapl"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert [q["symbol"] for q in data] == ["AAPL", "MSFT"]
        assert data[0]["percent_change"] == "+1.50%"

    def test_blank_quotes_is_422(self, client: TestClient) -> None:
        response = client.get("/quotes", params={"symbols": " , "})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request"

    def test_category(self, client: TestClient) -> None:
        body = client.get("/markets/americas").json()
        assert body["category"] == "Americas"
        assert [q["symbol"] for q in body["data"]] == ["S&P 500", "VIX"]

    def test_unknown_category_is_404(self, client: TestClient) -> None:
        response = client.get("/markets/mars")
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown market category", "detail": "mars"}

    def test_search_not_found(self, client: TestClient) -> None:
        response = client.get("/search", params={"q": "zzzz"})
        assert response.status_code == 404
        assert response.json()["detail"] == "ZZZZ"

    def test_history(self, client: TestClient) -> None:
        body = client.get("/history/AAPL", params={"range": "1M"}).json()
        assert body["synthetic"] is False
        assert len(body["history"]) == 10

    def test_history_invalid_range(self, client: TestClient) -> None:
        response = client.get("/history/AAPL", params={"range": "3M"})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid time range"

    def test_news(self, client: TestClient) -> None:
        news = client.get("/news", params={"limit": 3}).json()["news"]
        assert news[0]["title"] == "Stocks rally"


class TestChatRoutes:
    """Transcript and chat turns."""

    def test_new_user_sees_welcome(self, client: TestClient) -> None:
        messages = client.get("/sessions/alice/messages").json()
        assert [m["id"] for m in messages] == ["welcome"]

    def test_send_message(self, client: TestClient) -> None:
        response = client.post("/sessions/alice/messages", json={"message": "hi"})
        assert response.status_code == 200
        body = response.json()
        assert body["failed"] is False
        assert body["user_message"]["content"] == "hi"
        assert body["reply"]["role"] == "assistant"
        assert len(client.get("/sessions/alice/messages").json()) == 3

    def test_empty_message_rejected(self, client: TestClient) -> None:
        assert client.post("/sessions/alice/messages", json={"message": ""}).status_code == 422

    def test_reset(self, client: TestClient) -> None:
        client.post("/sessions/alice/messages", json={"message": "hi"})
        messages = client.delete("/sessions/alice/messages").json()
        assert [m["id"] for m in messages] == ["welcome"]


class TestWorkspaceRoutes:
    """Watchlist and portfolio."""

    def test_watchlist_add_and_remove(self, client: TestClient) -> None:
        added = client.post("/users/bob/watchlist", json={"symbol": "amd"}).json()["watchlist"]
        assert added[-1] == "AMD"
        removed = client.delete("/users/bob/watchlist/AMD").json()["watchlist"]
        assert "AMD" not in removed

    def test_chat_action_updates_watchlist(self, client: TestClient) -> None:
        client.post("/sessions/bob/messages", json={"message": "add AMD to my watchlist"})
        assert "AMD" in client.get("/users/bob/watchlist").json()["watchlist"]

    def test_default_portfolio_valuation(self, client: TestClient) -> None:
        body = client.get("/users/bob/portfolio").json()
        # AAPL 10 x 180 + NVDA 5 x 120 + MSFT 8 x 410
        assert body["total_value"] == pytest.approx(5680.0)
        assert body["largest"]["symbol"] == "MSFT"
        assert body["concentration"] == "very high"

    def test_invalid_quantity_is_422(self, client: TestClient) -> None:
        response = client.post("/users/bob/portfolio", json={"symbol": "AAPL", "quantity": 0})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid quantity"
