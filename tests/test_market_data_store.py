"""
Tests for the polling MarketDataStore.
"""

import asyncio

from marketminds.application.market.market_data_store import MarketDataStore
from marketminds.application.market.quote_service import QuoteService

from conftest import FakeMarketDataProvider


def make_store(provider: FakeMarketDataProvider, interval: float = 0.01) -> MarketDataStore:
    return MarketDataStore(QuoteService(provider, ttl=0), quote_interval=interval, news_interval=interval)


class TestSnapshot:
    """Tests for snapshot() and the refresh methods."""

    def test_first_view_fetches_synchronously(self) -> None:
        provider = FakeMarketDataProvider(prices={"S&P 500": (5100.0, 5000.0), "VIX": (14.0, 15.0)})
        store = make_store(provider)
        quotes = store.snapshot("Americas")
        assert [q.symbol for q in quotes] == ["S&P 500", "VIX"]
        assert store.active_category == "Americas"
        assert store.last_refreshed is not None

    def test_failed_refresh_keeps_previous_quotes(self) -> None:
        provider = FakeMarketDataProvider(prices={"GOLD": (2300.0, 2290.0)})
        store = make_store(provider)
        store.refresh_category("Commodities")
        provider.fail = True
        assert [q.symbol for q in store.refresh_category("Commodities")] == ["GOLD"]

    def test_failed_refresh_keeps_last_refreshed(self) -> None:
        """Stale quotes served during an outage do not count as a refresh."""
        provider = FakeMarketDataProvider(prices={"GOLD": (2300.0, 2290.0)})
        store = make_store(provider)
        store.refresh_category("Commodities")
        refreshed = store.last_refreshed
        provider.fail = True
        store.refresh_category("Commodities")
        assert store.last_refreshed == refreshed

    def test_news_falls_back_to_static_item_when_empty(self) -> None:
        provider = FakeMarketDataProvider()
        provider.fail = True
        store = make_store(provider)
        assert store.refresh_news()[0].source == "System"


class TestPolling:
    """Tests for the asyncio polling loops."""

    async def test_start_refreshes_active_category_and_news(self) -> None:
        provider = FakeMarketDataProvider(prices={"DAX": (18000.0, 17900.0)})
        store = make_store(provider)
        store.active_category = "Europe"
        tasks = store.start()
        try:
            await asyncio.sleep(0.05)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        assert [q.symbol for q in store.categories["Europe"]] == ["DAX"]
        assert len(provider.batch_calls) >= 1

    async def test_loop_survives_refresh_errors(self, monkeypatch) -> None:
        store = make_store(FakeMarketDataProvider())
        calls = []

        def boom(category):
            calls.append(category)
            raise RuntimeError("unexpected")

        monkeypatch.setattr(store, "refresh_category", boom)
        task = asyncio.create_task(store.poll_quotes())
        await asyncio.sleep(0.05)
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        assert len(calls) >= 2
