"""
Tests for the compiled turn graph through the Assistant facade.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from marketminds.application.assistant.assistant import Assistant, build_assistant
from marketminds.application.market.quote_service import QuoteService
from marketminds.domain.entities.conversation import ConversationContext
from marketminds.domain.entities.portfolio import AssistantCapabilities


@pytest.fixture
def assistant(quote_service: QuoteService) -> Assistant:
    return build_assistant(quote_service, today=lambda: date(2026, 3, 2))


def full_capabilities(watchlist=()) -> AssistantCapabilities:
    return AssistantCapabilities(
        watchlist=tuple(watchlist),
        add_to_watchlist=MagicMock(),
        remove_from_watchlist=MagicMock(),
        add_to_portfolio=MagicMock(),
    )


class TestClassifyAndRespond:
    """Synchronous graph runs."""

    def test_hi_is_help(self, assistant: Assistant) -> None:
        reply, context = assistant.classify_and_respond("hi", ConversationContext())
        assert reply.startswith("👋 How can I help you today?")
        assert context == ConversationContext()

    def test_action_runs_callbacks(self, assistant: Assistant) -> None:
        caps = full_capabilities()
        reply, _ = assistant.classify_and_respond("Create a tech portfolio", ConversationContext(), caps)
        assert caps.add_to_portfolio.call_count == 5
        assert "Tech Portfolio Created" in reply

    def test_action_without_callbacks_falls_through_to_analysis(self, assistant: Assistant) -> None:
        """With no capabilities the add template is skipped and the symbol is analysed."""
        reply, _ = assistant.classify_and_respond("add AAPL to watchlist", ConversationContext())
        assert "AAPL - Deep Analysis" in reply

    def test_goal_context_carries_over(self, assistant: Assistant) -> None:
        _, context = assistant.classify_and_respond("I have 100 dollars, turn it into 1000", ConversationContext())
        assert (context.last_amount, context.last_target) == (100, 1000)
        reply, context = assistant.classify_and_respond("what about 500", context)
        assert "Investment Analysis" in reply
        assert context.last_amount == 500

    def test_try_execute_action(self, assistant: Assistant) -> None:
        caps = full_capabilities(watchlist=["NVDA"])
        assert "already in your watchlist" in assistant.try_execute_action("add NVDA to watchlist", caps)
        assert assistant.try_execute_action("how is the market", caps) is None

    def test_declined_action_reroutes_to_show_command(self, assistant: Assistant) -> None:
        """A mutating template that cannot run yields to the read-only show template."""
        reply, _ = assistant.classify_and_respond("add NVDA to watchlist and show my portfolio", ConversationContext())
        assert "Your Watchlist is Empty" in reply

    @pytest.mark.parametrize(
        "message",
        [
            "add NVDA to watchlist and show my portfolio",
            "buy 5 shares of AAPL to my portfolio and show my watchlist",
            "remove TSLA from watchlist then show my portfolio",
        ],
    )
    @pytest.mark.parametrize(
        "capabilities",
        [
            None,
            AssistantCapabilities(),
            AssistantCapabilities(add_to_watchlist=MagicMock()),
            AssistantCapabilities(add_to_portfolio=MagicMock()),
            AssistantCapabilities(remove_from_watchlist=MagicMock()),
            full_capabilities(watchlist=["TSLA"]),
        ],
        ids=["none", "empty", "watchlist-add", "portfolio-add", "watchlist-remove", "full"],
    )
    def test_mixed_commands_always_reply(
        self, assistant: Assistant, message: str, capabilities: AssistantCapabilities | None
    ) -> None:
        """Action plus show phrasing replies under every capability subset."""
        reply, _ = assistant.classify_and_respond(message, ConversationContext(), capabilities)
        assert isinstance(reply, str) and reply.strip()


class TestAsyncRun:
    """ainvoke path used by the chat use case."""

    async def test_aclassify_and_respond(self, assistant: Assistant) -> None:
        reply, _ = await assistant.aclassify_and_respond("what is an ETF?", ConversationContext())
        assert reply.startswith("📚 **What is an ETF?**")
