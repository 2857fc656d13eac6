"""
Port (interface) for market data providers.
Infrastructure adapters (e.g. YFinanceMarketDataProvider) must implement this interface.

Every method raises MarketDataError on provider failure; caching, ordering
and degradation to stale data are application concerns (QuoteService).
"""

from abc import ABC, abstractmethod

from marketminds.domain.entities.market import HistoryPoint, NewsItem, Quote

TIME_RANGES = ("1D", "1W", "1M", "1Y", "5Y", "MAX")


class IMarketDataProvider(ABC):
    @abstractmethod
    def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        """Batch-fetch quotes for display symbols; symbols the provider lacks are omitted."""
        ...

    @abstractmethod
    def fetch_quote(self, symbol: str) -> Quote | None:
        """Single-symbol fallback fetch. Returns None when the provider has no data."""
        ...

    @abstractmethod
    def fetch_history(self, symbol: str, time_range: str = "1M") -> list[HistoryPoint]:
        """Closing prices for *time_range*, oldest first."""
        ...

    @abstractmethod
    def fetch_news(self, limit: int = 5) -> list[NewsItem]:
        """Latest market headlines, newest first."""
        ...
