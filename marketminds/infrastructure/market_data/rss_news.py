"""
Infrastructure adapter: Yahoo Finance RSS headlines (httpx + feedparser).

CompositeMarketDataProvider pairs a quote/history provider with this feed
so the application layer still sees a single IMarketDataProvider.
"""

import calendar
import logging
import time
from typing import Callable

import feedparser
import httpx

from marketminds.domain.entities.market import HistoryPoint, NewsItem, Quote
from marketminds.domain.errors import MarketDataError
from marketminds.domain.ports.market_data_port import IMarketDataProvider

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://feeds.finance.yahoo.com/rss/2.0/headline?s=^GSPC&region=US&lang=en-US"
NEWS_SOURCE = "Yahoo Finance"


def relative_time(published: time.struct_time | None, now: float) -> str:
    """'12m ago' under an hour, '3h ago' under a day, else '2d ago'; 'Recent' when unknown."""
    if published is None:
        return "Recent"
    minutes = max(0, int((now - calendar.timegm(published)) // 60))
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 1440:
        return f"{minutes // 60}h ago"
    return f"{minutes // 1440}d ago"


class RssNewsFeed:
    def __init__(
        self,
        url: str = DEFAULT_FEED_URL,
        timeout: float = 10.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._clock = clock

    def fetch(self, limit: int = 5) -> list[NewsItem]:
        try:
            response = httpx.get(self._url, timeout=self._timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise MarketDataError(f"News feed request failed: {exc}") from exc
        return self.parse(response.text, limit)

    def parse(self, document: str, limit: int = 5) -> list[NewsItem]:
        feed = feedparser.parse(document)
        if feed.bozo and not feed.entries:
            raise MarketDataError(f"News feed could not be parsed: {feed.get('bozo_exception')}")
        now = self._clock()
        return [
            NewsItem(
                title=entry.get("title") or "Market Update",
                source=NEWS_SOURCE,
                time=relative_time(entry.get("published_parsed"), now),
                url=entry.get("link") or "#",
            )
            for entry in feed.entries[:limit]
        ]


class CompositeMarketDataProvider(IMarketDataProvider):
    """Quotes and history from *market*, headlines from *news*."""

    def __init__(self, market: IMarketDataProvider, news: RssNewsFeed) -> None:
        self._market = market
        self._news = news

    def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        return self._market.fetch_quotes(symbols)

    def fetch_quote(self, symbol: str) -> Quote | None:
        return self._market.fetch_quote(symbol)

    def fetch_history(self, symbol: str, time_range: str = "1M") -> list[HistoryPoint]:
        return self._market.fetch_history(symbol, time_range)

    def fetch_news(self, limit: int = 5) -> list[NewsItem]:
        return self._news.fetch(limit)
