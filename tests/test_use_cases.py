"""
Tests for the application use cases.
"""

import asyncio
import random
from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from marketminds.application.assistant import replies
from marketminds.application.assistant.assistant import build_assistant
from marketminds.application.assistant.sessions import SessionRegistry
from marketminds.application.market.market_data_store import MarketDataStore
from marketminds.application.market.quote_service import QuoteService
from marketminds.application.use_cases.get_history import (
    SYNTHETIC_POINTS,
    GetHistoryUseCase,
    synthesize_history,
)
from marketminds.application.use_cases.get_news import GetNewsUseCase
from marketminds.application.use_cases.get_quotes import (
    GetMarketCategoryUseCase,
    GetQuotesUseCase,
    SearchSymbolUseCase,
)
from marketminds.application.use_cases.manage_conversation import (
    ConversationService,
    storage_key,
)
from marketminds.application.use_cases.manage_workspace import WorkspaceRegistry, WorkspaceState
from marketminds.application.use_cases.run_assistant_turn import RunAssistantTurnUseCase
from marketminds.application.use_cases.value_portfolio import ValuePortfolioUseCase, concentration_label
from marketminds.domain.entities.conversation import ConversationContext
from marketminds.domain.entities.portfolio import PortfolioPosition
from marketminds.domain.errors import (
    InvalidQuantityError,
    InvalidTimeRangeError,
    SymbolNotFoundError,
    UnknownCategoryError,
)
from marketminds.infrastructure.persistence.in_memory_message_store import InMemoryMessageStore

from conftest import TODAY


class TestQuoteUseCases:
    """GetQuotes / GetMarketCategory / SearchSymbol."""

    def test_blank_symbols_rejected(self, quote_service: QuoteService) -> None:
        with pytest.raises(ValueError):
            GetQuotesUseCase(quote_service).execute([" ", ""])

    def test_quotes_keep_request_order(self, quote_service: QuoteService) -> None:
        response = GetQuotesUseCase(quote_service).execute(["msft", "AAPL", "MSFT"])
        assert [q.symbol for q in response.data] == ["MSFT", "AAPL"]

    def test_category_is_case_insensitive(self, quote_service: QuoteService) -> None:
        quotes = GetMarketCategoryUseCase(MarketDataStore(quote_service)).execute("americas")
        assert [q.symbol for q in quotes] == ["S&P 500", "VIX"]

    def test_unknown_category(self, quote_service: QuoteService) -> None:
        with pytest.raises(UnknownCategoryError):
            GetMarketCategoryUseCase(MarketDataStore(quote_service)).execute("Mars")

    def test_search_resolves_ticker(self, quote_service: QuoteService) -> None:
        assert SearchSymbolUseCase(quote_service).execute(" nvda ").symbol == "NVDA"

    def test_search_miss_raises_not_found(self, quote_service: QuoteService) -> None:
        """Keyword aliases resolve before lookup; 'solar' maps to TAN, which has no quote."""
        with pytest.raises(SymbolNotFoundError) as exc_info:
            SearchSymbolUseCase(quote_service).execute("solar")
        assert exc_info.value.symbol == "TAN"


class TestGetHistory:
    """History lookups and the synthetic fallback."""

    def test_real_history_is_returned(self, quote_service: QuoteService) -> None:
        response = GetHistoryUseCase(quote_service).execute("AAPL", "1M")
        assert not response.synthetic
        assert len(response.history) == 10

    def test_synthetic_fallback_anchored_on_quote(self, quote_service: QuoteService) -> None:
        use_case = GetHistoryUseCase(quote_service, rng=random.Random(7), today=lambda: TODAY)
        response = use_case.execute("MSFT", "1Y")
        assert response.synthetic
        assert len(response.history) == SYNTHETIC_POINTS
        assert response.history[-1].price == 410.0
        assert response.history[-1].label == TODAY.isoformat()

    def test_synthetic_anchor_defaults_to_100(self, quote_service: QuoteService) -> None:
        response = GetHistoryUseCase(quote_service, rng=random.Random(1)).execute("ZZZZ")
        assert response.history[-1].price == 100.0

    def test_invalid_range(self, quote_service: QuoteService) -> None:
        with pytest.raises(InvalidTimeRangeError):
            GetHistoryUseCase(quote_service).execute("AAPL", "2D")

    def test_blank_symbol(self, quote_service: QuoteService) -> None:
        with pytest.raises(ValueError):
            GetHistoryUseCase(quote_service).execute("  ")

    def test_synthetic_prices_stay_positive(self) -> None:
        history = synthesize_history(1.0, date(2026, 3, 2), points=60, rng=random.Random(3))
        assert all(point.price >= 1.0 for point in history)
        assert history[0].label == "2026-01-02"


class TestGetNews:
    """GetNewsUseCase."""

    def test_limit_must_be_positive(self, quote_service: QuoteService) -> None:
        with pytest.raises(ValueError):
            GetNewsUseCase(quote_service).execute(0)

    def test_placeholder_when_feed_down(self, quote_service: QuoteService, provider) -> None:
        provider.fail = True
        news = GetNewsUseCase(quote_service).execute().news
        assert [item.source for item in news] == ["System"]


class TestConversationService:
    """Transcript restore, append and reset."""

    def test_empty_store_gives_welcome(self) -> None:
        history = ConversationService(InMemoryMessageStore()).history("u1")
        assert [m.id for m in history] == ["welcome"]
        assert history[0].content == replies.WELCOME_TEXT

    def test_welcome_and_storage_share_assistant_name(self) -> None:
        """The greeting and the transcript key both carry the Stockie name."""
        assert replies.WELCOME_TEXT.startswith("👋 **Welcome to Stockie!**")
        assert storage_key("u1").startswith("stockie_messages_v1")

    def test_append_persists_and_restores(self) -> None:
        store = InMemoryMessageStore()
        service = ConversationService(store)
        service.append("u1", "user", "hello")
        restored = ConversationService(store).history("u1")
        assert [(m.role, m.content) for m in restored][1:] == [("user", "hello")]

    def test_corrupt_transcript_falls_back_to_welcome(self) -> None:
        store = InMemoryMessageStore()
        store.save(storage_key("u1"), [{"role": "user"}])
        history = ConversationService(store).history("u1")
        assert [m.id for m in history] == ["welcome"]

    def test_reset_keeps_only_welcome(self) -> None:
        store = InMemoryMessageStore()
        service = ConversationService(store)
        service.append("u1", "user", "hello")
        service.reset("u1")
        assert [r["id"] for r in store.load(storage_key("u1"))] == ["welcome"]

    def test_users_are_isolated(self) -> None:
        service = ConversationService(InMemoryMessageStore())
        service.append("u1", "user", "hello")
        assert len(service.history("u2")) == 1


class TestWorkspace:
    """WorkspaceState mutations and the registry."""

    def test_defaults(self) -> None:
        workspace = WorkspaceState()
        assert workspace.watchlist == ["AAPL", "TSLA", "NVDA", "MSFT", "AMZN"]
        assert workspace.portfolio[0] == PortfolioPosition("AAPL", 10.0)

    def test_add_merges_existing_position(self) -> None:
        workspace = WorkspaceState()
        workspace.add_to_portfolio("aapl", 2)
        assert workspace.capabilities().holdings()["AAPL"] == 12.0

    def test_non_positive_quantity(self) -> None:
        with pytest.raises(InvalidQuantityError):
            WorkspaceState().add_to_portfolio("AAPL", 0)

    def test_watchlist_add_is_idempotent(self) -> None:
        workspace = WorkspaceState(watchlist=[])
        workspace.add_to_watchlist("nvda")
        workspace.add_to_watchlist("NVDA")
        assert workspace.watchlist == ["NVDA"]

    def test_registry_collects_symbols(self) -> None:
        registry = WorkspaceRegistry()
        registry.get("a").add_to_watchlist("AMD")
        registry.get("b")
        assert "AMD" in registry.all_symbols()
        assert registry.all_symbols().count("AAPL") == 1


class TestValuePortfolio:
    """ValuePortfolioUseCase."""

    def test_empty_portfolio(self, quote_service: QuoteService) -> None:
        assert ValuePortfolioUseCase(quote_service).execute([]).total_value == 0.0

    def test_allocation_and_concentration(self, quote_service: QuoteService) -> None:
        valuation = ValuePortfolioUseCase(quote_service).execute(
            [PortfolioPosition("AAPL", 10), PortfolioPosition("MSFT", 1), PortfolioPosition("ZZZZ", 4)]
        )
        assert valuation.total_value == pytest.approx(2210.0)
        assert valuation.largest.symbol == "AAPL"
        assert valuation.largest.allocation == pytest.approx(1800 / 2210 * 100)
        assert valuation.concentration == "very high"
        assert valuation.positions[2].value == 0.0

    @pytest.mark.parametrize("allocation, label", [(60, "very high"), (40, "high"), (30, "moderate")])
    def test_concentration_label(self, allocation: float, label: str) -> None:
        assert concentration_label(allocation) == label

    def test_outage_values_with_last_known_prices(self, quote_service: QuoteService, provider, clock) -> None:
        """Expired quotes that cannot be refreshed still price the portfolio."""
        use_case = ValuePortfolioUseCase(quote_service)
        positions = [PortfolioPosition("AAPL", 2)]
        assert use_case.execute(positions).total_value == pytest.approx(360.0)
        clock.now += 60
        provider.fail = True
        assert use_case.execute(positions).total_value == pytest.approx(360.0)

    async def test_poll_survives_errors(self, quote_service: QuoteService, provider) -> None:
        calls = []

        def symbols() -> list[str]:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("dictionary changed size during iteration")
            return ["AAPL"]

        task = asyncio.create_task(ValuePortfolioUseCase(quote_service).poll(symbols, 0.01))
        await asyncio.sleep(0.05)
        assert not task.done()
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        assert len(calls) >= 2
        assert provider.batch_calls


@pytest.fixture
def turn_setup(quote_service: QuoteService):
    store = InMemoryMessageStore()
    observability = MagicMock()
    observability.as_callback.return_value = None
    sessions = SessionRegistry(lambda: build_assistant(quote_service, today=lambda: TODAY))
    conversations = ConversationService(store)
    workspaces = WorkspaceRegistry()
    use_case = RunAssistantTurnUseCase(sessions, conversations, workspaces, observability)
    return SimpleNamespace(
        use_case=use_case,
        sessions=sessions,
        conversations=conversations,
        workspaces=workspaces,
        observability=observability,
    )


class TestRunAssistantTurn:
    """RunAssistantTurnUseCase."""

    async def test_turn_appends_both_messages(self, turn_setup) -> None:
        result = await turn_setup.use_case.execute("u1", "hi")
        assert not result.failed
        assert result.reply.content.startswith("👋 How can I help you today?")
        history = turn_setup.conversations.history("u1")
        assert [m.role for m in history] == ["assistant", "user", "assistant"]
        turn_setup.observability.flush.assert_called_once()

    async def test_action_mutates_workspace(self, turn_setup) -> None:
        await turn_setup.use_case.execute("u1", "add AMD to my watchlist")
        assert "AMD" in turn_setup.workspaces.get("u1").watchlist

    async def test_goal_context_kept_between_turns(self, turn_setup) -> None:
        await turn_setup.use_case.execute("u1", "I have 100 dollars, turn it into 1000")
        assert turn_setup.sessions.get("u1").context == ConversationContext(100, 1000)

    async def test_failure_returns_fallback(self, turn_setup) -> None:
        session = turn_setup.sessions.get("u1")
        session.assistant = MagicMock()
        session.assistant.aclassify_and_respond = AsyncMock(side_effect=RuntimeError("boom"))

        result = await turn_setup.use_case.execute("u1", "analyze AAPL")
        assert result.failed
        assert result.reply.content.startswith(replies.FALLBACK_HEADER)
        turn_setup.observability.flush.assert_called_once()

    async def test_blank_message(self, turn_setup) -> None:
        with pytest.raises(ValueError):
            await turn_setup.use_case.execute("u1", "   ")

    async def test_reset_drops_session(self, turn_setup) -> None:
        await turn_setup.use_case.execute("u1", "hi")
        transcript = turn_setup.use_case.reset("u1")
        assert "u1" not in turn_setup.sessions
        assert [m.id for m in transcript] == ["welcome"]
