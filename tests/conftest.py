"""
Shared fixtures: an in-memory market data provider and pre-wired services.
No network access anywhere in the suite.
"""

from datetime import date

import pytest

from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.market import HistoryPoint, NewsItem, Quote, build_quote
from marketminds.domain.errors import MarketDataError
from marketminds.domain.ports.market_data_port import IMarketDataProvider

TODAY = date(2026, 3, 2)


def uptrend(start: float = 172.0, step: float = 2.0, points: int = 10) -> list[HistoryPoint]:
    return [HistoryPoint(label=f"2026-02-{i + 1:02d}", price=start + step * i) for i in range(points)]


class FakeMarketDataProvider(IMarketDataProvider):
    """Serves canned prices and records every call."""

    def __init__(
        self,
        prices: dict[str, tuple[float, float]] | None = None,
        histories: dict[str, list[HistoryPoint]] | None = None,
        news: list[NewsItem] | None = None,
    ) -> None:
        self.prices = dict(prices or {})
        self.histories = dict(histories or {})
        self.news = list(news or [])
        self.batch_calls: list[list[str]] = []
        self.single_calls: list[str] = []
        self.history_calls: list[tuple[str, str]] = []
        self.fail = False
        self.batch_misses: set[str] = set()

    def _quote(self, symbol: str) -> Quote | None:
        if symbol not in self.prices:
            return None
        current, previous = self.prices[symbol]
        return build_quote(symbol, f"{symbol} Inc.", current, previous)

    def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        self.batch_calls.append(list(symbols))
        if self.fail:
            raise MarketDataError("provider down")
        quotes = [self._quote(s) for s in symbols if s not in self.batch_misses]
        return [q for q in quotes if q is not None]

    def fetch_quote(self, symbol: str) -> Quote | None:
        self.single_calls.append(symbol)
        if self.fail:
            raise MarketDataError("provider down")
        return self._quote(symbol)

    def fetch_history(self, symbol: str, time_range: str = "1M") -> list[HistoryPoint]:
        self.history_calls.append((symbol, time_range))
        if self.fail:
            raise MarketDataError("provider down")
        return list(self.histories.get(symbol, []))

    def fetch_news(self, limit: int = 5) -> list[NewsItem]:
        if self.fail:
            raise MarketDataError("feed down")
        return self.news[:limit]


DEFAULT_PRICES = {
    "AAPL": (180.0, 177.34),
    "MSFT": (410.0, 405.0),
    "NVDA": (120.0, 118.0),
    "GOOGL": (170.0, 172.0),
    "TSLA": (250.0, 255.0),
    "S&P 500": (5100.0, 5080.0),
    "VIX": (14.0, 14.5),
}


@pytest.fixture
def provider() -> FakeMarketDataProvider:
    return FakeMarketDataProvider(
        prices=DEFAULT_PRICES,
        histories={"AAPL": uptrend()},
        news=[NewsItem(title="Stocks rally", source="Yahoo Finance", time="5m ago", url="https://example.com/a")],
    )


@pytest.fixture
def clock():
    """Manually advanced monotonic clock."""

    class _Clock:
        now = 1000.0

        def __call__(self) -> float:
            return self.now

    return _Clock()


@pytest.fixture
def quote_service(provider: FakeMarketDataProvider, clock) -> QuoteService:
    return QuoteService(provider, ttl=10.0, clock=clock)
