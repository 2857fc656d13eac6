"""
Application service: TTL-cached access to the market data provider.
Depends only on Domain ports and entities — no infrastructure imports.

Caching rules:
  - A quote fetched less than `ttl` seconds ago is served from the cache.
  - Uncached symbols go to the provider in one batch call; symbols the batch
    misses are retried one by one through the single-quote fallback.
  - Entries are never evicted, only overwritten (last writer wins per symbol).
  - Failures never raise: they come back as FetchResult.error together with
    whatever could still be served.
"""

import logging
import time
from typing import Callable

from marketminds.domain.entities.fetch_result import FetchResult
from marketminds.domain.entities.market import (
    HistoryResponse,
    NewsItem,
    NewsResponse,
    Quote,
    QuoteCacheEntry,
    QuoteResponse,
)
from marketminds.domain.errors import FetchError, InvalidTimeRangeError, MarketDataError
from marketminds.domain.ports.market_data_port import TIME_RANGES, IMarketDataProvider

logger = logging.getLogger(__name__)

FALLBACK_NEWS = [
    NewsItem(
        title="Markets update - Check back for latest news",
        source="System",
        time="Now",
        url="#",
    )
]


def normalize_symbols(symbols: list[str]) -> list[str]:
    """Upper-case, strip and de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for raw in symbols or []:
        symbol = (raw or "").strip().upper()
        if symbol:
            seen.setdefault(symbol, None)
    return list(seen)


class QuoteService:
    DEFAULT_TTL: float = 10.0

    def __init__(
        self,
        provider: IMarketDataProvider,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._ttl = ttl
        self._clock = clock
        self._cache: dict[str, QuoteCacheEntry] = {}

    def cached(self, symbol: str) -> Quote | None:
        """Return the last cached quote for *symbol* regardless of age."""
        entry = self._cache.get(symbol.upper())
        return entry.quote if entry else None

    def get_quotes(self, symbols: list[str]) -> FetchResult[QuoteResponse]:
        """Quotes ordered like the de-duplicated, upper-cased *symbols*; misses are omitted."""
        wanted = normalize_symbols(symbols)
        now = self._clock()
        found: dict[str, Quote] = {}
        to_fetch: list[str] = []

        for symbol in wanted:
            entry = self._cache.get(symbol)
            if entry and entry.is_fresh(now, self._ttl):
                found[symbol] = entry.quote
            else:
                to_fetch.append(symbol)

        if to_fetch:
            logger.debug("Cache miss for %d of %d symbols", len(to_fetch), len(wanted))
        error: FetchError | None = None

        if to_fetch:
            try:
                for quote in self._provider.fetch_quotes(to_fetch):
                    self._store(quote, now)
                    found[quote.symbol] = quote
            except MarketDataError as exc:
                logger.warning("Batch quote fetch failed: %s", exc.message)
                error = FetchError("quotes", exc.message)

            for symbol in (s for s in to_fetch if s not in found):
                try:
                    quote = self._provider.fetch_quote(symbol)
                except MarketDataError as exc:
                    logger.warning("Quote fetch failed for %s: %s", symbol, exc.message)
                    error = error or FetchError("quote", exc.message)
                    continue
                if quote is not None:
                    self._store(quote, now)
                    found[symbol] = quote

        if error is not None:
            for symbol in (s for s in to_fetch if s not in found and s in self._cache):
                found[symbol] = self._cache[symbol].quote

        ordered = QuoteResponse(data=[found[s] for s in wanted if s in found])
        if error is not None:
            return FetchResult.failure(error, ordered)
        return FetchResult.success(ordered)

    def get_history(self, symbol: str, time_range: str = "1D") -> FetchResult[HistoryResponse]:
        """Fetch closing-price history; an empty series is returned on failure.

        Raises:
            InvalidTimeRangeError: if *time_range* is not a supported range.
        """
        key = (time_range or "").upper()
        if key not in TIME_RANGES:
            raise InvalidTimeRangeError(time_range)
        symbol = symbol.strip().upper()
        try:
            history = self._provider.fetch_history(symbol, key)
        except MarketDataError as exc:
            logger.warning("History fetch failed for %s (%s): %s", symbol, key, exc.message)
            return FetchResult.failure(
                FetchError("history", exc.message),
                HistoryResponse(symbol=symbol, time_range=key),
            )
        return FetchResult.success(HistoryResponse(symbol=symbol, time_range=key, history=history))

    def get_news(self, limit: int = 5) -> FetchResult[NewsResponse]:
        """Latest headlines, or a single static placeholder item when the feed fails."""
        try:
            news = self._provider.fetch_news(limit)
        except MarketDataError as exc:
            logger.warning("News fetch failed: %s", exc.message)
            return FetchResult.failure(FetchError("news", exc.message), NewsResponse(news=list(FALLBACK_NEWS)))
        return FetchResult.success(NewsResponse(news=news))

    def _store(self, quote: Quote, now: float) -> None:
        self._cache[quote.symbol] = QuoteCacheEntry(quote=quote, fetched_at=now)
