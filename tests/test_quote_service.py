"""
Tests for QuoteService caching, ordering and failure degradation.
"""

import pytest

from marketminds.application.market.quote_service import FALLBACK_NEWS, QuoteService, normalize_symbols
from marketminds.domain.errors import InvalidTimeRangeError


class TestGetQuotes:
    """Tests for QuoteService.get_quotes()."""

    def test_order_follows_deduplicated_upper_input(self, quote_service: QuoteService) -> None:
        """Results follow the de-duplicated upper-cased input; unknown symbols are omitted."""
        result = quote_service.get_quotes(["msft", "AAPL", "zzzz", "MSFT"])
        assert result.ok
        assert [q.symbol for q in result.value.data] == ["MSFT", "AAPL"]

    def test_cache_hit_within_ttl_skips_provider(self, quote_service: QuoteService, provider, clock) -> None:
        """A second call inside the TTL issues no further fetch for the same symbol."""
        quote_service.get_quotes(["AAPL"])
        clock.now += 9.9
        quote_service.get_quotes(["AAPL"])
        assert provider.batch_calls == [["AAPL"]]

    def test_cache_expires_after_ttl(self, quote_service: QuoteService, provider, clock) -> None:
        """At exactly the TTL the entry is stale and refetched."""
        quote_service.get_quotes(["AAPL"])
        clock.now += 10.0
        quote_service.get_quotes(["AAPL"])
        assert provider.batch_calls == [["AAPL"], ["AAPL"]]

    def test_only_uncached_symbols_fetched(self, quote_service: QuoteService, provider) -> None:
        """Fresh cache entries are not part of the batch request."""
        quote_service.get_quotes(["AAPL"])
        quote_service.get_quotes(["AAPL", "MSFT"])
        assert provider.batch_calls[-1] == ["MSFT"]

    def test_batch_misses_use_single_fallback(self, quote_service: QuoteService, provider) -> None:
        """Symbols the batch call omits are retried one by one."""
        provider.batch_misses = {"NVDA"}
        result = quote_service.get_quotes(["AAPL", "NVDA"])
        assert provider.single_calls == ["NVDA"]
        assert [q.symbol for q in result.value.data] == ["AAPL", "NVDA"]

    def test_failure_degrades_to_stale_cache(self, quote_service: QuoteService, provider, clock) -> None:
        """A failing provider returns an error plus whatever is cached, never raises."""
        quote_service.get_quotes(["AAPL"])
        clock.now += 60
        provider.fail = True
        result = quote_service.get_quotes(["AAPL", "MSFT"])
        assert not result.ok
        assert [q.symbol for q in result.value.data] == ["AAPL"]
        assert result.value.data[0].price == "180.00"

    def test_normalize_symbols(self) -> None:
        """Blank entries vanish, order is kept."""
        assert normalize_symbols([" aapl", "", "MSFT", "AAPL"]) == ["AAPL", "MSFT"]


class TestGetHistoryAndNews:
    """Tests for get_history() and get_news()."""

    def test_invalid_range_raises(self, quote_service: QuoteService) -> None:
        with pytest.raises(InvalidTimeRangeError):
            quote_service.get_history("AAPL", "2D")

    def test_range_is_case_insensitive(self, quote_service: QuoteService, provider) -> None:
        result = quote_service.get_history("aapl", "1m")
        assert result.value.time_range == "1M"
        assert provider.history_calls == [("AAPL", "1M")]

    def test_history_failure_is_empty(self, quote_service: QuoteService, provider) -> None:
        provider.fail = True
        result = quote_service.get_history("AAPL", "1Y")
        assert not result.ok
        assert result.value.history == []

    def test_news_failure_uses_static_item(self, quote_service: QuoteService, provider) -> None:
        provider.fail = True
        result = quote_service.get_news()
        assert result.value.news == FALLBACK_NEWS
        assert result.error.operation == "news"
