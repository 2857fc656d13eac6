"""
Application service: per-process holder of the dashboard's latest quotes and news.

Two independent polling loops refresh it (quotes and news on separate
intervals). There is no locking: each refresh replaces a whole category or
the whole news list, so concurrent completions only risk staleness.
Blocking provider calls are pushed to worker threads.
"""

import asyncio
import logging
from datetime import datetime, timezone

from marketminds.application.market.catalog import DEFAULT_CATEGORY, MARKET_CATEGORIES
from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.market import NewsItem, Quote

logger = logging.getLogger(__name__)


class MarketDataStore:
    def __init__(
        self,
        quote_service: QuoteService,
        quote_interval: float = 15.0,
        news_interval: float = 120.0,
    ) -> None:
        self._quotes = quote_service
        self._quote_interval = quote_interval
        self._news_interval = news_interval
        self.categories: dict[str, list[Quote]] = {name: [] for name in MARKET_CATEGORIES}
        self.news: list[NewsItem] = []
        self.active_category = DEFAULT_CATEGORY
        self.last_refreshed: datetime | None = None

    def refresh_category(self, category: str) -> list[Quote]:
        result = self._quotes.get_quotes(MARKET_CATEGORIES[category])
        if result.ok or result.value.data:
            self.categories[category] = result.value.data
        if result.ok:
            self.last_refreshed = datetime.now(timezone.utc)
        return self.categories[category]

    def refresh_news(self) -> list[NewsItem]:
        result = self._quotes.get_news()
        if result.ok or not self.news:
            self.news = result.value.news
        return self.news

    def snapshot(self, category: str) -> list[Quote]:
        """Quotes for *category*, fetching synchronously the first time it is viewed."""
        self.active_category = category
        if not self.categories[category]:
            return self.refresh_category(category)
        return self.categories[category]

    async def poll_quotes(self) -> None:
        while True:
            category = self.active_category
            try:
                await asyncio.to_thread(self.refresh_category, category)
            except Exception:
                logger.exception("Quote refresh for %s failed", category)
            await asyncio.sleep(self._quote_interval)

    async def poll_news(self) -> None:
        while True:
            try:
                await asyncio.to_thread(self.refresh_news)
            except Exception:
                logger.exception("News refresh failed")
            await asyncio.sleep(self._news_interval)

    def start(self) -> list[asyncio.Task]:
        """Start both polling loops on the running event loop; the caller cancels them."""
        logger.info(
            "Starting market polling (quotes every %ss, news every %ss)",
            self._quote_interval,
            self._news_interval,
        )
        return [
            asyncio.create_task(self.poll_quotes(), name="poll-quotes"),
            asyncio.create_task(self.poll_news(), name="poll-news"),
        ]
