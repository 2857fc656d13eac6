"""
Tests for the market domain entities (quote construction and parsing).
"""

import pytest

from marketminds.domain.entities.conversation import ConversationContext, Message
from marketminds.domain.entities.fetch_result import FetchResult
from marketminds.domain.entities.market import build_quote, parse_number
from marketminds.domain.entities.portfolio import AssistantCapabilities, PortfolioPosition
from marketminds.domain.errors import FetchError


class TestBuildQuote:
    """Tests for build_quote()."""

    @pytest.mark.parametrize(
        "current, previous",
        [(101.0, 100.0), (100.0, 100.0), (99.0, 100.0), (0.5, 0.75), (5100.25, 5200.0)],
    )
    def test_is_positive_matches_change_sign(self, current: float, previous: float) -> None:
        """is_positive is exactly absolute_change >= 0."""
        quote = build_quote("X", "X", current, previous)
        assert quote.is_positive == (quote.change_value >= 0)

    def test_unchanged_price_is_positive(self) -> None:
        """A zero change counts as positive and carries a plus sign."""
        quote = build_quote("AAPL", "Apple", 100.0, 100.0)
        assert quote.is_positive
        assert quote.absolute_change == "+0.00"
        assert quote.percent_change == "+0.00%"

    def test_small_prices_use_four_decimals(self) -> None:
        """Prices below 10 are formatted with 4 decimals, others with 2."""
        assert build_quote("EUR/USD", "EUR/USD", 1.25, 1.2).price == "1.2500"
        assert build_quote("AAPL", "Apple", 180.0, 177.34).price == "180.00"

    def test_negative_change_has_no_plus_sign(self) -> None:
        """Losses keep their minus sign and no plus sign."""
        quote = build_quote("TSLA", "Tesla", 250.0, 255.0)
        assert quote.absolute_change == "-5.00"
        assert quote.percent_change == "-1.96%"
        assert not quote.is_positive

    def test_zero_previous_close_rejected(self) -> None:
        """Percent change is undefined without a previous close."""
        with pytest.raises(ValueError):
            build_quote("X", "X", 1.0, 0.0)

    def test_symbol_upper_cased(self) -> None:
        """Symbols are stored upper-case."""
        assert build_quote("aapl", "", 10.0, 9.0).symbol == "AAPL"


class TestParseNumber:
    """Tests for parse_number()."""

    def test_strips_display_decoration(self) -> None:
        """Signs, currency and percent markers are ignored."""
        assert parse_number("+1.50%") == 1.5
        assert parse_number("$1,234.00") == 1234.0
        assert parse_number("-0.25") == -0.25

    def test_garbage_is_zero(self) -> None:
        """Unparseable strings yield 0."""
        assert parse_number("N/A") == 0.0
        assert parse_number("") == 0.0


class TestConversationEntities:
    """Tests for Message and ConversationContext."""

    def test_message_record_layout(self) -> None:
        """Persisted records carry id, role, content and an ISO timestamp."""
        message = Message(role="user", content="hi")
        record = message.to_record()
        assert set(record) == {"id", "role", "content", "timestamp"}
        assert Message.from_record(record) == message

    def test_context_update_is_functional(self) -> None:
        """remember() returns a new context and leaves the old one untouched."""
        before = ConversationContext()
        after = before.remember(100, 1000)
        assert not before.has_goal
        assert after.has_goal
        assert (after.last_amount, after.last_target) == (100, 1000)


class TestCapabilities:
    """Tests for AssistantCapabilities.holdings()."""

    def test_holdings_aggregate_repeated_symbols(self) -> None:
        """Quantities of repeated positions are summed."""
        caps = AssistantCapabilities(
            portfolio=(PortfolioPosition("AAPL", 2), PortfolioPosition("AAPL", 3), PortfolioPosition("MSFT", 1))
        )
        assert caps.holdings() == {"AAPL": 5, "MSFT": 1}


class TestFetchResult:
    """Tests for FetchResult."""

    def test_failure_carries_fallback(self) -> None:
        """A failure still exposes the degraded value."""
        result = FetchResult.failure(FetchError("quotes", "timeout"), [])
        assert not result.ok
        assert result.value == []
        assert result.error.reason == "timeout"
